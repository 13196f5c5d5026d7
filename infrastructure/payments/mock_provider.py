"""
Mock Payment Provider
=====================

In-memory implementation of PaymentProviderInterface for tests and local
development. Intents are stored on the instance; tests drive them to a final
state with mark_succeeded() / mark_failed().
"""

import json
import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

from .interface import (
    PaymentException,
    PaymentIntent,
    PaymentProviderInterface,
    PaymentStatus,
    WebhookEvent,
    to_minor_units,
)

logger = logging.getLogger(__name__)


class MockPaymentProvider(PaymentProviderInterface):
    """
    Mock payment provider.

    Instead of calling a gateway, this provider:
        - Logs all payment operations
        - Keeps intents in memory for verification
        - Accepts any webhook whose signature equals ``webhook_secret``
    """

    webhook_secret = "mock-webhook-secret"

    def __init__(self):
        self.intents: Dict[str, PaymentIntent] = {}
        self.fail_next_create = False

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        if self.fail_next_create:
            self.fail_next_create = False
            raise PaymentException("Mock gateway unavailable")

        intent_id = f"pi_mock_{uuid.uuid4().hex[:16]}"
        intent = PaymentIntent(
            intent_id=intent_id,
            amount=to_minor_units(amount),
            currency=currency.lower(),
            status=PaymentStatus.PENDING,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:8]}",
            customer_email=customer_email,
            metadata={key: str(value) if not isinstance(value, (list, tuple)) else ",".join(map(str, value))
                      for key, value in (metadata or {}).items()},
        )
        self.intents[intent_id] = intent
        logger.info(f"[MOCK PAYMENT] Created intent {intent_id} for {intent.amount} {intent.currency}")
        return intent

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            return self.intents[intent_id]
        except KeyError:
            raise PaymentException(f"No such payment intent: {intent_id}")

    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        if signature != self.webhook_secret:
            raise PaymentException("Webhook signature verification failed")
        try:
            event = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise PaymentException("Invalid webhook payload") from e
        return WebhookEvent(
            event_id=event.get("id", f"evt_mock_{uuid.uuid4().hex[:12]}"),
            event_type=event["type"],
            data=event["data"]["object"],
            created_at=event.get("created", 0),
        )

    # Test helpers

    def mark_succeeded(self, intent_id: str) -> PaymentIntent:
        intent = self.retrieve_payment_intent(intent_id)
        intent.status = PaymentStatus.SUCCEEDED
        return intent

    def mark_failed(self, intent_id: str) -> PaymentIntent:
        intent = self.retrieve_payment_intent(intent_id)
        intent.status = PaymentStatus.FAILED
        return intent

    def clear(self):
        self.intents.clear()
        self.fail_next_create = False
