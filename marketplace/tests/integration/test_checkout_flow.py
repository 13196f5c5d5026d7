from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from infrastructure.container import container
from infrastructure.events import get_event_bus
from marketplace.models import CartItem, Order
from marketplace.tests.factories import ADDRESS, CartItemFactory, ProductFactory


class CheckoutFlowIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        get_event_bus().clear_published()
        self.client = APIClient()
        self.buyer = UserFactory()
        self.client.force_authenticate(user=self.buyer)
        self.provider = container.payment()

        self.lamp = ProductFactory(price=Decimal("10.00"), stock_quantity=5)
        self.chair = ProductFactory(price=Decimal("20.00"), stock_quantity=3)
        CartItemFactory(cart__user=self.buyer, product=self.lamp, quantity=2)
        CartItemFactory(cart__user=self.buyer, product=self.chair, quantity=1)

        self.checkout_url = reverse("marketplace:order-checkout")
        self.confirm_url = reverse("marketplace:order-confirm-payment")

    def _checkout(self, **overrides):
        body = {"delivery_address": ADDRESS, "notes": "Leave at the door"}
        body.update(overrides)
        return self.client.post(self.checkout_url, body, format="json")

    def test_checkout_creates_orders_and_intent(self):
        response = self._checkout()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data["order_ids"]), 2)
        self.assertEqual(Decimal(response.data["subtotal"]), Decimal("40.00"))
        self.assertEqual(Decimal(response.data["total"]), Decimal("2540.00"))

        intent = self.provider.retrieve_payment_intent(response.data["payment_intent_id"])
        self.assertEqual(intent.amount, 254000)
        self.assertEqual(intent.metadata["type"], "order")

        orders = Order.objects.filter(payment_intent_id=intent.intent_id)
        self.assertEqual(orders.count(), 2)
        self.assertTrue(all(o.status == "processing" and o.payment_status == "pending" for o in orders))
        self.assertEqual(sum(o.grand_total for o in orders), Decimal("2540.00"))

    def test_empty_cart(self):
        CartItem.objects.all().delete()
        response = self._checkout()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "cart_empty")

    def test_missing_address_fields(self):
        response = self._checkout(delivery_address={"city": "Toronto"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_gateway_failure_cancels_orders(self):
        self.provider.fail_next_create = True
        response = self._checkout()
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(Order.objects.count(), 2)
        self.assertFalse(Order.objects.exclude(status="cancelled", payment_status="failed").exists())

    def test_confirm_successful_payment(self):
        intent_id = self._checkout().data["payment_intent_id"]
        self.provider.mark_succeeded(intent_id)

        response = self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["payment_status"], "paid")

        orders = Order.objects.filter(payment_intent_id=intent_id)
        self.assertTrue(all(o.status == "confirmed" and o.payment_status == "paid" for o in orders))
        self.lamp.refresh_from_db()
        self.chair.refresh_from_db()
        self.assertEqual(self.lamp.stock_quantity, 3)
        self.assertEqual(self.chair.stock_quantity, 2)
        self.assertFalse(CartItem.objects.filter(cart__user=self.buyer).exists())

        placed = [e for e in get_event_bus().published if e["event_type"] == "order.placed"]
        self.assertEqual(len(placed), 2)

    def test_confirm_is_idempotent(self):
        intent_id = self._checkout().data["payment_intent_id"]
        self.provider.mark_succeeded(intent_id)

        self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")
        response = self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.lamp.refresh_from_db()
        self.assertEqual(self.lamp.stock_quantity, 3)
        placed = [e for e in get_event_bus().published if e["event_type"] == "order.placed"]
        self.assertEqual(len(placed), 2)

    def test_confirm_failed_payment(self):
        intent_id = self._checkout().data["payment_intent_id"]
        self.provider.mark_failed(intent_id)

        response = self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")
        self.assertEqual(response.data["payment_status"], "failed")
        self.assertFalse(Order.objects.exclude(status="cancelled").exists())
        self.lamp.refresh_from_db()
        self.assertEqual(self.lamp.stock_quantity, 5)

    def test_confirm_pending_payment(self):
        intent_id = self._checkout().data["payment_intent_id"]
        response = self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "payment_not_succeeded")

    def test_confirm_someone_elses_payment(self):
        intent_id = self._checkout().data["payment_intent_id"]
        self.provider.mark_succeeded(intent_id)

        self.client.force_authenticate(user=UserFactory())
        response = self.client.post(self.confirm_url, {"payment_intent_id": intent_id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
