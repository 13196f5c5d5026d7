"""
Dependency Injection Container
================================

Service locator for infrastructure adapters and domain services. Views ask the
container for services instead of constructing them, so tests can swap the
payment provider or storage backend in one place.

Usage:
    from infrastructure.container import container

    payment = container.payment()
    checkout = container.checkout_service()
"""

import logging
from typing import Optional

from .geocoding import NominatimClient
from .payments import PaymentFactory, PaymentProviderInterface
from .storage import MediaUploadService, StorageFactory, StorageInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Lazily builds and caches service instances.

    Singleton: every import of ``container`` sees the same cache.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._services = {}
            self._initialized = True
            logger.info("Service container initialized")

    def _get(self, name: str, factory):
        if name not in self._services:
            self._services[name] = factory()
            logger.debug(f"Created {name}: {type(self._services[name]).__name__}")
        return self._services[name]

    # ===== Infrastructure =====

    def payment(self, backend: Optional[str] = None) -> PaymentProviderInterface:
        """Payment provider ('stripe' or 'mock'); defaults to settings.PAYMENT_PROVIDER."""
        if backend is not None:
            self._services["payment"] = PaymentFactory.create(backend)
        return self._get("payment", PaymentFactory.create)

    def storage(self) -> StorageInterface:
        return self._get("storage", StorageFactory.create)

    def geocoder(self) -> NominatimClient:
        return self._get("geocoder", NominatimClient)

    def media_upload_service(self) -> MediaUploadService:
        return self._get("media_upload_service", lambda: MediaUploadService(storage=self.storage()))

    # ===== Domain services =====

    def account_service(self):
        from authentication.domain.services.account_service import AccountService

        return self._get("account_service", AccountService)

    def product_service(self):
        from marketplace.domain.services.product_service import ProductService

        return self._get("product_service", ProductService)

    def pricing_service(self):
        from marketplace.domain.services.pricing_service import PricingService

        return self._get("pricing_service", PricingService)

    def cart_service(self):
        from marketplace.domain.services.cart_service import CartService

        return self._get("cart_service", lambda: CartService(pricing_service=self.pricing_service()))

    def order_service(self):
        from marketplace.domain.services.order_service import OrderService

        return self._get("order_service", OrderService)

    def checkout_service(self):
        from marketplace.domain.services.checkout_service import CheckoutService

        return self._get(
            "checkout_service",
            lambda: CheckoutService(
                cart_service=self.cart_service(),
                pricing_service=self.pricing_service(),
                payment_provider=self.payment(),
            ),
        )

    def job_service(self):
        from jobs.domain.services.job_service import JobService

        return self._get("job_service", JobService)

    def job_application_service(self):
        from jobs.domain.services.application_service import JobApplicationService

        return self._get("job_application_service", JobApplicationService)

    def event_service(self):
        from events.domain.services.event_service import EventService

        return self._get("event_service", EventService)

    def registration_service(self):
        from events.domain.services.registration_service import RegistrationService

        return self._get("registration_service", RegistrationService)

    def event_application_service(self):
        from events.domain.services.application_service import EventApplicationService

        return self._get("event_application_service", EventApplicationService)

    def freelancer_service(self):
        from talent.domain.services.freelancer_service import FreelancerService

        return self._get("freelancer_service", FreelancerService)

    def artiste_service(self):
        from talent.domain.services.artiste_service import ArtisteService

        return self._get("artiste_service", ArtisteService)

    def hire_service(self):
        from talent.domain.services.hire_service import HireService

        return self._get("hire_service", HireService)

    def credit_service(self):
        from credits.domain.services.credit_service import CreditService

        return self._get("credit_service", lambda: CreditService(payment_provider=self.payment()))

    def boost_service(self):
        from credits.domain.services.boost_service import BoostService

        return self._get("boost_service", BoostService)

    def review_service(self):
        from engagement.domain.services.review_service import ReviewService

        return self._get("review_service", ReviewService)

    def wishlist_service(self):
        from engagement.domain.services.wishlist_service import WishlistService

        return self._get("wishlist_service", WishlistService)

    def message_service(self):
        from chat.domain.services.message_service import MessageService

        return self._get("message_service", MessageService)

    def notification_service(self):
        from notifications.domain.services.notification_service import NotificationService

        return self._get("notification_service", NotificationService)

    def admin_dashboard_service(self):
        from dashboard.services import AdminDashboardService

        return self._get("admin_dashboard_service", AdminDashboardService)

    def reset(self):
        """Drop every cached instance (tests, environment switches)."""
        self._services = {}
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()


def get_payment_provider() -> PaymentProviderInterface:
    return container.payment()
