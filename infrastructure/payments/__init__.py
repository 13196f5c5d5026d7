"""
Payment Service Abstraction Layer
==================================

Provides a unified interface for payment intents across payment providers.
"""

from .factory import PaymentFactory
from .interface import (
    PaymentException,
    PaymentIntent,
    PaymentProviderInterface,
    PaymentStatus,
    WebhookEvent,
    to_minor_units,
)
from .mock_provider import MockPaymentProvider
from .stripe_provider import StripeProvider

__all__ = [
    "PaymentProviderInterface",
    "WebhookEvent",
    "PaymentIntent",
    "PaymentStatus",
    "PaymentException",
    "StripeProvider",
    "MockPaymentProvider",
    "PaymentFactory",
    "to_minor_units",
]
