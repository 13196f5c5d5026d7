"""
Payment Provider Interface
===========================

Abstract base class defining the contract for payment operations.
Checkout and credit purchases both go through payment intents: the server
creates the intent, the client confirms it with the gateway SDK, and the
server later reads the outcome back (confirm endpoint or webhook).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PaymentStatus(str, Enum):
    """Payment status enumeration."""

    PENDING = "pending"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"
    REFUNDED = "refunded"


@dataclass
class PaymentIntent:
    """
    Represents a payment intent.

    Attributes:
        intent_id: Unique payment intent identifier
        amount: Payment amount in smallest currency unit (cents)
        currency: ISO currency code
        status: Current payment status
        client_secret: Secret handed to the client SDK to confirm the payment
        customer_email: Customer's email address
        metadata: Custom data attached at creation (type, order ids, credits...)
    """

    intent_id: str
    amount: int
    currency: str
    status: PaymentStatus
    client_secret: Optional[str] = None
    customer_email: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WebhookEvent:
    """
    Represents a verified webhook event from the payment provider.

    Attributes:
        event_id: Unique event identifier
        event_type: Type of event (e.g., 'payment_intent.succeeded')
        data: Event payload object
        created_at: Event creation timestamp
    """

    event_id: str
    event_type: str
    data: Dict[str, Any]
    created_at: int


class PaymentProviderInterface(ABC):
    """
    Abstract interface for payment provider operations.

    Concrete implementations:
        - StripeProvider: Stripe payment intents
        - MockPaymentProvider: in-memory intents for tests and local development
    """

    @abstractmethod
    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentIntent:
        """
        Create a payment intent.

        Args:
            amount: Amount in major currency units (converted to cents by the provider)
            currency: ISO currency code
            metadata: Custom data to attach to the intent
            customer_email: Receipt email

        Returns:
            PaymentIntent including its client_secret

        Raises:
            PaymentException: If creation fails
        """
        pass

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """
        Retrieve payment intent details.

        Raises:
            PaymentException: If retrieval fails
        """
        pass

    @abstractmethod
    def verify_webhook(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Verify and parse webhook event from payment provider.

        Raises:
            PaymentException: If verification fails or signature is invalid
        """
        pass


class PaymentException(Exception):
    """Base exception for payment operations."""

    pass


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount (12.50) to cents (1250)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
