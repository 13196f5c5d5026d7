from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import EmployerFactory, UserFactory
from jobs.models import Job
from jobs.tests.factories import JobApplicationFactory, JobFactory


class JobListIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("jobs:job-list")
        JobFactory(title="Backend developer", salary_min=Decimal("90000"), salary_max=Decimal("120000"))
        JobFactory(title="Barista", company="Bean Co", job_type="part-time", category="Hospitality",
                   salary_min=Decimal("30000"), salary_max=Decimal("35000"))
        JobFactory(title="Closed role", is_active=False)

    def test_lists_active_jobs(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)

    def test_filters(self):
        self.assertEqual(self.client.get(self.url, {"search": "bean"}).data["count"], 1)
        self.assertEqual(self.client.get(self.url, {"job_type": "part-time"}).data["count"], 1)
        self.assertEqual(self.client.get(self.url, {"min_salary": "100000"}).data["count"], 1)
        self.assertEqual(self.client.get(self.url, {"max_salary": "40000"}).data["count"], 1)

    def test_salary_sort(self):
        response = self.client.get(self.url, {"sort_by": "salary_high"})
        self.assertEqual(response.data["results"][0]["title"], "Backend developer")
        response = self.client.get(self.url, {"sort_by": "salary_low"})
        self.assertEqual(response.data["results"][0]["title"], "Barista")


class JobManagementIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.employer = EmployerFactory()
        self.client.force_authenticate(user=self.employer)

    def test_post_job(self):
        response = self.client.post(
            reverse("jobs:job-list"),
            {
                "title": "Data analyst",
                "company": "Zade",
                "description": "Crunch numbers",
                "skills_required": "sql, python",
                "salary_min": "50000",
                "salary_max": "70000",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["skills_required"], ["sql", "python"])
        self.assertEqual(response.data["salary_currency"], "CAD")

    def test_salary_range_validation(self):
        response = self.client.post(
            reverse("jobs:job-list"),
            {"title": "x", "company": "y", "description": "z", "salary_min": "9", "salary_max": "1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_employer_updates(self):
        job = JobFactory(employer=self.employer)
        other = JobFactory()
        url = reverse("jobs:job-detail", args=[job.id])
        self.assertEqual(self.client.patch(url, {"title": "Renamed"}, format="json").status_code, status.HTTP_200_OK)
        self.assertEqual(
            self.client.patch(reverse("jobs:job-detail", args=[other.id]), {"title": "x"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Job.objects.filter(pk=job.pk).exists())

    def test_mine(self):
        JobFactory(employer=self.employer, is_active=False)
        JobFactory()
        response = self.client.get(reverse("jobs:job-mine"))
        self.assertEqual(len(response.data), 1)


class JobApplicationIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.job = JobFactory()
        self.applicant = UserFactory()

    def test_apply_then_duplicate(self):
        self.client.force_authenticate(user=self.applicant)
        url = reverse("jobs:job-apply", args=[self.job.id])

        response = self.client.post(url, {"cover_letter": "Pick me", "expected_salary": "75000"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["job"]["id"], str(self.job.id))

        response = self.client.post(url, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.get(reverse("jobs:application-list"))
        self.assertEqual(len(response.data), 1)

    def test_employer_reviews_applications(self):
        application = JobApplicationFactory(job=self.job)

        self.client.force_authenticate(user=self.job.employer)
        response = self.client.get(reverse("jobs:job-applications", args=[self.job.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        response = self.client.patch(
            reverse("jobs:application-update-status", args=[application.id]), {"status": "interviewed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "interviewed")

    def test_applicant_cannot_see_other_applications(self):
        self.client.force_authenticate(user=self.applicant)
        response = self.client.get(reverse("jobs:job-applications", args=[self.job.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
