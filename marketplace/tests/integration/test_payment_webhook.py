import json
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from infrastructure.container import container
from marketplace.models import Order
from marketplace.tests.factories import ADDRESS, CartItemFactory, ProductFactory


class PaymentWebhookIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.provider = container.payment()
        self.url = reverse("marketplace:payment-webhook")

        self.buyer = UserFactory()
        self.product = ProductFactory(price=Decimal("60000.00"), stock_quantity=2)
        CartItemFactory(cart__user=self.buyer, product=self.product, quantity=1)

        result = container.checkout_service().checkout(self.buyer, ADDRESS)
        self.intent_id = result.value["payment_intent_id"]

    def _post(self, event_type, amount=6000000, signature=None, metadata=None):
        payload = {
            "id": "evt_test_1",
            "type": event_type,
            "data": {
                "object": {
                    "id": self.intent_id,
                    "amount": amount,
                    "metadata": metadata if metadata is not None else {"type": "order"},
                }
            },
        }
        return self.client.post(
            self.url,
            data=json.dumps(payload),
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=signature or self.provider.webhook_secret,
        )

    def test_bad_signature_rejected(self):
        response = self._post("payment_intent.succeeded", signature="forged")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Order.objects.get().payment_status, "pending")

    def test_succeeded_marks_orders_paid(self):
        # Above the free shipping threshold, so the intent covers the product only
        response = self._post("payment_intent.succeeded")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["handled"])

        order = Order.objects.get()
        self.assertEqual(order.status, "confirmed")
        self.assertEqual(order.payment_status, "paid")
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 1)

    def test_amount_mismatch_not_applied(self):
        response = self._post("payment_intent.succeeded", amount=100)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["handled"])
        self.assertEqual(Order.objects.get().payment_status, "pending")

    def test_payment_failed_cancels_orders(self):
        self._post("payment_intent.payment_failed")
        order = Order.objects.get()
        self.assertEqual(order.status, "cancelled")
        self.assertEqual(order.payment_status, "failed")

    def test_late_failure_does_not_undo_payment(self):
        self._post("payment_intent.succeeded")
        self._post("payment_intent.payment_failed")
        self.assertEqual(Order.objects.get().payment_status, "paid")

    def test_unrelated_event_acknowledged(self):
        response = self._post("charge.refunded")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["handled"])
