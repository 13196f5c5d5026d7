from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import AdminFactory, UserFactory
from credits.tests.factories import CreditTransactionFactory
from marketplace.tests.factories import ProductFactory


class DashboardViewsIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()
        self.client.force_authenticate(user=self.admin)

    def test_regular_user_forbidden(self):
        client = APIClient()
        client.force_authenticate(user=UserFactory())

        response = client.get(reverse("dashboard:stats"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "permission_denied")

    def test_stats_and_analytics(self):
        ProductFactory()

        response = self.client.get(reverse("dashboard:stats"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_products"], 1)

        response = self.client.get(reverse("dashboard:analytics"), {"days": 14})
        self.assertEqual(len(response.data["series"]), 14)

        response = self.client.get(reverse("dashboard:analytics"), {"days": "week"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_management(self):
        target = UserFactory(full_name="Linus Qztorvalds")

        response = self.client.get(reverse("dashboard:users"), {"search": "qztorvalds"})
        self.assertEqual([u["id"] for u in response.data], [str(target.id)])

        response = self.client.post(reverse("dashboard:user-toggle-disabled", args=[target.id]))
        self.assertTrue(response.data["is_disabled"])

        response = self.client.delete(reverse("dashboard:user-delete", args=[self.admin.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "cannot_modify_self")

        response = self.client.delete(reverse("dashboard:user-delete", args=[target.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_listings(self):
        product = ProductFactory()

        response = self.client.get(reverse("dashboard:listings", args=["product"]))
        self.assertEqual(response.data[0]["id"], str(product.id))

        response = self.client.post(reverse("dashboard:listing-toggle-active", args=["product", product.id]))
        self.assertFalse(response.data["is_active"])

        response = self.client.get(reverse("dashboard:listings", args=["planet"]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_credit_transactions(self):
        tx = CreditTransactionFactory()

        response = self.client.get(reverse("dashboard:credit-transactions"))

        self.assertEqual(response.data[0]["id"], str(tx.id))
        self.assertEqual(response.data[0]["user_email"], tx.user.email)
