from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from talent.models import ArtisteProfile, FreelancerProfile
from talent.tests.factories import ArtisteProfileFactory, FreelancerProfileFactory


class FreelancerViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.designer = FreelancerProfileFactory(title="Brand designer", hourly_rate=Decimal("80"), rating=Decimal("4.80"))
        self.dev = FreelancerProfileFactory(
            title="Django developer", skills=["python"], hourly_rate=Decimal("40"), rating=Decimal("4.20"),
            availability_status="busy", category="Development",
        )

    def test_default_sort_is_rating(self):
        response = self.client.get(reverse("talent:freelancer-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["title"] for r in response.data["results"]], ["Brand designer", "Django developer"])

    def test_filters_and_rate_sort(self):
        url = reverse("talent:freelancer-list")
        self.assertEqual(self.client.get(url, {"search": "python"}).data["count"], 1)
        self.assertEqual(self.client.get(url, {"availability": "busy"}).data["count"], 1)
        self.assertEqual(self.client.get(url, {"category": "development"}).data["count"], 1)
        response = self.client.get(url, {"sort_by": "rate_low"})
        self.assertEqual(response.data["results"][0]["title"], "Django developer")

    def test_upsert_my_profile(self):
        user = UserFactory()
        self.client.force_authenticate(user=user)
        url = reverse("talent:freelancer-me")

        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.put(url, {"bio": "No title"}, format="json").status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.put(url, {"title": "Copywriter", "skills": "seo, blogs", "rating": "5"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["skills"], ["seo", "blogs"])
        self.assertEqual(Decimal(response.data["rating"]), Decimal("0"))

        response = self.client.patch(url, {"hourly_rate": "65.00"}, format="json")
        self.assertEqual(Decimal(response.data["hourly_rate"]), Decimal("65.00"))
        self.assertEqual(FreelancerProfile.objects.filter(user=user).count(), 1)

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)

    def test_hire_flow(self):
        client_user = UserFactory()
        self.client.force_authenticate(user=client_user)
        response = self.client.post(
            reverse("talent:freelancer-hire", args=[self.designer.id]),
            {"project_title": "Logo", "project_description": "New logo", "budget": "300.00", "timeline_days": 7},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        hire_id = response.data["id"]

        self.client.force_authenticate(user=self.designer.user)
        response = self.client.get(reverse("talent:hire-list"), {"role": "freelancer"})
        self.assertEqual(len(response.data), 1)

        response = self.client.patch(reverse("talent:hire-update-status", args=[hire_id]), {"status": "accepted"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "accepted")


class ArtisteViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_boosted_artistes_first(self):
        ArtisteProfileFactory(stage_name="Top rated", rating=Decimal("5.00"))
        ArtisteProfileFactory(stage_name="Boosted", rating=Decimal("3.00"), is_boosted=True, boost_score=70)

        response = self.client.get(reverse("talent:artiste-list"))
        self.assertEqual([r["stage_name"] for r in response.data["results"]], ["Boosted", "Top rated"])

    def test_search_specialties(self):
        ArtisteProfileFactory(stage_name="Soul singer", category="musician", specialties=["soul", "jazz"])
        ArtisteProfileFactory()
        response = self.client.get(reverse("talent:artiste-list"), {"search": "jazz"})
        self.assertEqual(response.data["count"], 1)

    def test_stage_name_required(self):
        user = UserFactory()
        self.client.force_authenticate(user=user)
        url = reverse("talent:artiste-me")
        self.assertEqual(self.client.patch(url, {"bio": "hi"}, format="json").status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.put(url, {"stage_name": "MC Maple", "category": "musician"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(ArtisteProfile.objects.filter(user=user, stage_name="MC Maple").exists())
