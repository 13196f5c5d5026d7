from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import AdminFactory, UserFactory
from infrastructure.events import get_event_bus
from marketplace.tests.factories import OrderFactory


class OrderViewIntegrationTest(TestCase):
    def setUp(self):
        get_event_bus().clear_published()
        self.client = APIClient()
        self.order = OrderFactory()
        self.buyer = self.order.buyer
        self.seller = self.order.seller
        self.detail_url = reverse("marketplace:order-detail", args=[self.order.id])
        self.status_url = reverse("marketplace:order-update-status", args=[self.order.id])

    def test_buyer_and_seller_views(self):
        OrderFactory(buyer=self.buyer, status="delivered")

        self.client.force_authenticate(user=self.buyer)
        response = self.client.get(reverse("marketplace:order-list"))
        self.assertEqual(response.data["count"], 2)
        response = self.client.get(reverse("marketplace:order-list"), {"status": "delivered"})
        self.assertEqual(response.data["count"], 1)

        self.client.force_authenticate(user=self.seller)
        response = self.client.get(reverse("marketplace:order-list"), {"role": "seller"})
        self.assertEqual(response.data["count"], 1)
        response = self.client.get(reverse("marketplace:order-list"))
        self.assertEqual(response.data["count"], 0)

    def test_invalid_role(self):
        self.client.force_authenticate(user=self.buyer)
        response = self.client.get(reverse("marketplace:order-list"), {"role": "courier"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_permissions(self):
        for user, expected in (
            (self.buyer, status.HTTP_200_OK),
            (self.seller, status.HTTP_200_OK),
            (AdminFactory(), status.HTTP_200_OK),
            (UserFactory(), status.HTTP_403_FORBIDDEN),
        ):
            self.client.force_authenticate(user=user)
            self.assertEqual(self.client.get(self.detail_url).status_code, expected)

    def test_seller_ships_then_delivers(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.patch(self.status_url, {"status": "shipped", "tracking_number": "1Z999"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "shipped")
        self.assertEqual(response.data["tracking_number"], "1Z999")

        response = self.client.patch(self.status_url, {"status": "delivered"}, format="json")
        self.assertEqual(response.data["status"], "delivered")

        changed = [e for e in get_event_bus().published if e["event_type"] == "order.status_changed"]
        self.assertEqual([e["payload"]["new_status"] for e in changed], ["shipped", "delivered"])

    def test_buyer_cannot_update_status(self):
        self.client.force_authenticate(user=self.buyer)
        response = self.client.patch(self.status_url, {"status": "shipped"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_invalid_transition(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.patch(self.status_url, {"status": "delivered"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_status_transition")

    def test_cannot_cancel_paid_order(self):
        self.client.force_authenticate(user=self.seller)
        response = self.client.patch(self.status_url, {"status": "cancelled"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_cancel_unpaid_order(self):
        order = OrderFactory(seller=self.seller, status="processing", payment_status="pending")
        self.client.force_authenticate(user=order.seller)
        response = self.client.patch(
            reverse("marketplace:order-update-status", args=[order.id]), {"status": "cancelled"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
