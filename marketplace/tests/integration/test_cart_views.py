from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from marketplace.models import CartItem
from marketplace.tests.factories import ProductFactory


class CartViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

        self.lamp = ProductFactory(price=Decimal("10.00"), stock_quantity=10)
        self.chair = ProductFactory(price=Decimal("20.00"), stock_quantity=5)

        self.cart_url = reverse("marketplace:cart-list")
        self.add_url = reverse("marketplace:cart-add-item")
        self.update_url = reverse("marketplace:cart-update-item")
        self.remove_url = reverse("marketplace:cart-remove-item")
        self.clear_url = reverse("marketplace:cart-clear")

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(self.cart_url).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_empty_cart(self):
        response = self.client.get(self.cart_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["item_count"], 0)
        self.assertEqual(Decimal(response.data["shipping"]), Decimal("0"))
        self.assertEqual(Decimal(response.data["total"]), Decimal("0"))

    def test_add_item_merges_quantities(self):
        self.client.post(self.add_url, {"product_id": str(self.lamp.id), "quantity": 2}, format="json")
        response = self.client.post(self.add_url, {"product_id": str(self.lamp.id), "quantity": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["items"]), 1)
        self.assertEqual(response.data["items"][0]["quantity"], 5)
        self.assertEqual(Decimal(response.data["subtotal"]), Decimal("50.00"))
        self.assertEqual(Decimal(response.data["shipping"]), Decimal("2500"))
        self.assertEqual(Decimal(response.data["total"]), Decimal("2550.00"))
        self.assertEqual(response.data["item_count"], 5)

    def test_add_beyond_stock_rejected(self):
        self.client.post(self.add_url, {"product_id": str(self.chair.id), "quantity": 4}, format="json")
        response = self.client.post(self.add_url, {"product_id": str(self.chair.id), "quantity": 2}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "insufficient_stock")
        self.assertEqual(CartItem.objects.get(product=self.chair).quantity, 4)

    def test_add_inactive_or_own_product_rejected(self):
        inactive = ProductFactory(is_active=False)
        response = self.client.post(self.add_url, {"product_id": str(inactive.id)}, format="json")
        self.assertEqual(response.data["code"], "product_inactive")

        own = ProductFactory(seller=self.user)
        response = self.client.post(self.add_url, {"product_id": str(own.id)}, format="json")
        self.assertEqual(response.data["code"], "cannot_buy_own_product")

    def test_add_unknown_product(self):
        response = self.client.post(
            self.add_url, {"product_id": "0b7c1f43-5c43-4f6a-9f57-000000000000"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_quantity_and_zero_removes(self):
        self.client.post(self.add_url, {"product_id": str(self.lamp.id), "quantity": 1}, format="json")

        response = self.client.patch(self.update_url, {"product_id": str(self.lamp.id), "quantity": 4}, format="json")
        self.assertEqual(response.data["items"][0]["quantity"], 4)

        response = self.client.patch(self.update_url, {"product_id": str(self.lamp.id), "quantity": 0}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])

    def test_remove_missing_item(self):
        response = self.client.post(self.remove_url, {"product_id": str(self.lamp.id)}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_remove_and_clear(self):
        self.client.post(self.add_url, {"product_id": str(self.lamp.id)}, format="json")
        self.client.post(self.add_url, {"product_id": str(self.chair.id)}, format="json")

        response = self.client.post(self.remove_url, {"product_id": str(self.lamp.id)}, format="json")
        self.assertEqual(len(response.data["items"]), 1)

        response = self.client.post(self.clear_url)
        self.assertEqual(response.data["item_count"], 0)
