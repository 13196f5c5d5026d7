import json

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from credits.tests.factories import CreditAccountFactory
from infrastructure.container import container
from marketplace.tests.factories import ProductFactory


class CreditPurchaseIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_packages_public(self):
        response = APIClient().get(reverse("credits:credit-packages"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0], {"credits": 10, "price": 1000})

    def test_purchase_and_confirm(self):
        response = self.client.post(reverse("credits:credit-purchase"), {"credits": 10}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        intent_id = response.data["payment_intent_id"]

        container.payment().mark_succeeded(intent_id)
        confirm = self.client.post(reverse("credits:credit-confirm"), {"payment_intent_id": intent_id}, format="json")
        self.assertEqual(confirm.status_code, status.HTTP_200_OK)
        self.assertEqual(confirm.data["balance"], 10)

        balance = self.client.get(reverse("credits:credit-balance"))
        self.assertEqual(balance.data, {"balance": 10})
        history = self.client.get(reverse("credits:credit-transactions"))
        self.assertEqual(history.data[0]["transaction_type"], "purchase")

    def test_webhook_grants_credits(self):
        intent_id = self.client.post(reverse("credits:credit-purchase"), {"credits": 50}, format="json").data[
            "payment_intent_id"
        ]
        provider = container.payment()
        provider.mark_succeeded(intent_id)

        payload = {
            "type": "payment_intent.succeeded",
            "data": {"object": {"id": intent_id, "metadata": {"type": "credit_purchase"}}},
        }
        response = APIClient().post(
            reverse("marketplace:payment-webhook"),
            data=json.dumps(payload),
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=provider.webhook_secret,
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["handled"])
        self.assertEqual(container.credit_service().get_balance(self.user).value, 50)

    def test_invalid_package_rejected(self):
        response = self.client.post(reverse("credits:credit-purchase"), {"credits": 7}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class BoostIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.product = ProductFactory()
        self.client.force_authenticate(user=self.product.seller)

    def test_plans_public(self):
        response = APIClient().get(reverse("credits:boost-plans"))
        self.assertEqual([plan["plan"] for plan in response.data], ["7d", "14d", "30d"])

    def test_boost_flow(self):
        CreditAccountFactory(user=self.product.seller, balance=100)
        payload = {"entity_type": "product", "entity_id": str(self.product.id), "plan": "7d"}

        response = self.client.post(reverse("credits:boost-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        again = self.client.post(reverse("credits:boost-list"), payload, format="json")
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)

        mine = self.client.get(reverse("credits:boost-list"))
        self.assertEqual(len(mine.data), 1)

    def test_insufficient_credits_is_402(self):
        payload = {"entity_type": "product", "entity_id": str(self.product.id), "plan": "7d"}
        response = self.client.post(reverse("credits:boost-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_402_PAYMENT_REQUIRED)
        self.assertEqual(response.data["code"], "insufficient_credits")
