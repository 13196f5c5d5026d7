from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from marketplace.tests.factories import ProductFactory


class ReviewIntegrationTest(TestCase):
    def setUp(self):
        self.product = ProductFactory()
        self.client = APIClient()
        self.client.force_authenticate(user=UserFactory())

    def test_submit_and_list(self):
        response = self.client.post(
            reverse("engagement:review-list"),
            {"entity_type": "product", "entity_id": str(self.product.id), "rating": 4, "comment": "Solid"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        listing = APIClient().get(
            reverse("engagement:review-list"), {"entity_type": "product", "entity_id": str(self.product.id)}
        )
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data["total_reviews"], 1)
        self.assertEqual(listing.data["results"][0]["comment"], "Solid")

    def test_list_requires_entity(self):
        response = APIClient().get(reverse("engagement:review-list"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rating_out_of_range(self):
        response = self.client.post(
            reverse("engagement:review-list"),
            {"entity_type": "product", "entity_id": str(self.product.id), "rating": 0},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class WishlistIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=UserFactory())
        self.product = ProductFactory(title="Desk")

    def test_toggle_list_remove(self):
        payload = {"entity_type": "product", "entity_id": str(self.product.id)}
        toggle = self.client.post(reverse("engagement:wishlist-toggle"), payload, format="json")
        self.assertEqual(toggle.data, {"wishlisted": True})

        listing = self.client.get(reverse("engagement:wishlist-list"))
        self.assertEqual(listing.data[0]["entity"]["title"], "Desk")

        check = self.client.get(reverse("engagement:wishlist-check"), payload)
        self.assertTrue(check.data["wishlisted"])

        remove = self.client.delete(reverse("engagement:wishlist-detail", args=[listing.data[0]["id"]]))
        self.assertEqual(remove.status_code, status.HTTP_204_NO_CONTENT)

    def test_anonymous_rejected(self):
        response = APIClient().get(reverse("engagement:wishlist-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
