"""
Stripe Payment Provider
========================

Concrete implementation of PaymentProviderInterface using Stripe PaymentIntents.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import stripe
from django.conf import settings
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from utils.logging_utils import mask_value

from .interface import (
    PaymentException,
    PaymentIntent,
    PaymentProviderInterface,
    PaymentStatus,
    WebhookEvent,
    to_minor_units,
)

logger = logging.getLogger(__name__)

# Transient gateway failures worth retrying
_RETRYABLE = (
    stripe.RateLimitError,
    stripe.APIConnectionError,
    stripe.APIError,
)

stripe_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(_RETRYABLE),
    reraise=True,
)


class StripeProvider(PaymentProviderInterface):
    """
    Stripe payment provider implementation.

    Configuration (in settings.py):
        STRIPE_SECRET_KEY: Stripe secret API key
        STRIPE_PUBLISHABLE_KEY: Stripe publishable key (handed to clients)
        STRIPE_WEBHOOK_SECRET: Webhook endpoint secret for signature verification
    """

    def __init__(self):
        stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", "")
        self.webhook_secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", "")

        if not stripe.api_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    @stripe_retry
    def _create_payment_intent_api(self, **kwargs):
        return stripe.PaymentIntent.create(**kwargs)

    @stripe_retry
    def _retrieve_payment_intent_api(self, intent_id):
        return stripe.PaymentIntent.retrieve(intent_id)

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        """
        Create a Stripe payment intent with automatic payment methods.

        Stripe metadata values must be strings; lists (order ids) are joined
        with commas before sending.
        """
        amount_cents = to_minor_units(amount)
        stripe_metadata = {
            key: ",".join(str(v) for v in value) if isinstance(value, (list, tuple)) else str(value)
            for key, value in (metadata or {}).items()
        }

        params = {
            "amount": amount_cents,
            "currency": currency.lower(),
            "automatic_payment_methods": {"enabled": True},
            "metadata": stripe_metadata,
        }
        if customer_email:
            params["receipt_email"] = customer_email

        try:
            intent = self._create_payment_intent_api(**params)
        except stripe.StripeError as e:
            logger.error(f"Stripe payment intent creation failed: {str(e)}")
            raise PaymentException(f"Failed to create payment intent: {str(e)}") from e

        logger.info(
            f"Created Stripe payment intent {intent.id} for {amount_cents} {currency.lower()} "
            f"(customer={mask_value(customer_email)})"
        )
        return self._to_payment_intent(intent)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        try:
            intent = self._retrieve_payment_intent_api(intent_id)
        except stripe.StripeError as e:
            logger.error(f"Failed to retrieve payment intent {intent_id}: {str(e)}")
            raise PaymentException(f"Payment intent retrieval failed: {str(e)}") from e

        logger.info(f"Retrieved payment intent: {intent_id}")
        return self._to_payment_intent(intent)

    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Verify Stripe webhook signature and parse event.

        Raises:
            PaymentException: If the payload is malformed or the signature is invalid
        """
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as e:
            logger.error(f"Invalid webhook payload: {str(e)}")
            raise PaymentException("Invalid webhook payload") from e
        except stripe.SignatureVerificationError as e:
            logger.error(f"Webhook signature verification failed: {str(e)}")
            raise PaymentException("Webhook signature verification failed") from e

        logger.info(f"Verified Stripe webhook event: {event['type']}")
        return WebhookEvent(
            event_id=event["id"],
            event_type=event["type"],
            data=event["data"]["object"],
            created_at=event["created"],
        )

    def _to_payment_intent(self, intent) -> PaymentIntent:
        return PaymentIntent(
            intent_id=intent.id,
            amount=intent.amount,
            currency=intent.currency,
            status=self._map_stripe_payment_status(intent.status),
            client_secret=getattr(intent, "client_secret", None),
            customer_email=getattr(intent, "receipt_email", None),
            metadata=dict(intent.metadata or {}),
        )

    def _map_stripe_payment_status(self, stripe_status: str) -> PaymentStatus:
        """Map Stripe payment intent status to internal PaymentStatus."""
        status_mapping = {
            "requires_payment_method": PaymentStatus.PENDING,
            "requires_confirmation": PaymentStatus.PENDING,
            "requires_action": PaymentStatus.PROCESSING,
            "processing": PaymentStatus.PROCESSING,
            "requires_capture": PaymentStatus.PROCESSING,
            "canceled": PaymentStatus.CANCELED,
            "succeeded": PaymentStatus.SUCCEEDED,
        }

        return status_mapping.get(stripe_status, PaymentStatus.FAILED)
