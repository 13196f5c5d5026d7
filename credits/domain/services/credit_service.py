"""
CreditService - credit balances, purchases and admin adjustments.

Purchases go through a payment intent tagged ``type=credit_purchase``. The
credits are granted once per intent: the unique ``payment_intent_id`` on the
purchase transaction makes both the confirm endpoint and the webhook safe to
replay.
"""

from typing import Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from credits.domain.events import CreditsPurchasedEvent
from credits.models import CreditAccount, CreditTransaction
from infrastructure.events import get_event_bus
from infrastructure.observability.metrics import credits_purchased_total, record_payment
from infrastructure.payments import PaymentException, PaymentProviderInterface, PaymentStatus
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

# credits -> price in dollars
CREDIT_PACKAGES = {
    10: 1000,
    50: 4500,
    100: 8000,
    500: 35000,
}


def get_account(user_id, lock: bool = False) -> CreditAccount:
    """Return the user's account, creating an empty one on first use."""
    account, _ = CreditAccount.objects.get_or_create(user_id=user_id)
    if lock:
        account = CreditAccount.objects.select_for_update().get(pk=account.pk)
    return account


class CreditService(BaseService):
    def __init__(self, payment_provider: Optional[PaymentProviderInterface] = None):
        super().__init__()
        if payment_provider is None:
            from infrastructure.container import container

            payment_provider = container.payment()
        self.payment_provider = payment_provider

    def get_balance(self, user) -> ServiceResult[int]:
        return service_ok(get_account(user.id).balance)

    def list_transactions(self, user, limit: int = 50) -> ServiceResult[List[CreditTransaction]]:
        return service_ok(list(CreditTransaction.objects.filter(user=user)[:limit]))

    def packages(self) -> ServiceResult[List[Dict]]:
        return service_ok([{"credits": credits, "price": price} for credits, price in CREDIT_PACKAGES.items()])

    @BaseService.log_performance
    def purchase_credits(self, user, package_credits) -> ServiceResult[Dict]:
        """
        Start a credit purchase.

        Returns:
            ServiceResult with {client_secret, payment_intent_id, credits, price}
        """
        try:
            credits = int(package_credits)
        except (TypeError, ValueError):
            credits = None
        if credits not in CREDIT_PACKAGES:
            return service_err(ErrorCodes.INVALID_PACKAGE, f"Unknown credit package: {package_credits}")
        price = CREDIT_PACKAGES[credits]

        try:
            intent = self.payment_provider.create_payment_intent(
                amount=price,
                currency=getattr(settings, "PAYMENT_CURRENCY", "cad"),
                metadata={"type": "credit_purchase", "credits": credits, "user_id": str(user.id)},
                customer_email=user.email,
            )
        except PaymentException as e:
            self.logger.error(f"Credit purchase intent failed for user {user.id}: {e}")
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Payment could not be initiated")

        self.logger.info(f"User {user.id} started purchase of {credits} credits ({intent.intent_id})")
        return service_ok(
            {
                "client_secret": intent.client_secret,
                "payment_intent_id": intent.intent_id,
                "credits": credits,
                "price": price,
            }
        )

    @BaseService.log_performance
    def confirm_credit_purchase(self, user, payment_intent_id: str) -> ServiceResult[Dict]:
        try:
            intent = self.payment_provider.retrieve_payment_intent(payment_intent_id)
        except PaymentException as e:
            self.logger.error(f"Could not retrieve intent {payment_intent_id}: {e}")
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Could not verify payment")

        metadata = intent.metadata or {}
        if metadata.get("type") != "credit_purchase":
            return service_err(ErrorCodes.INVALID_INPUT, "Not a credit purchase")
        if metadata.get("user_id") != str(user.id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "This payment belongs to another user")
        if intent.status != PaymentStatus.SUCCEEDED:
            return service_err(ErrorCodes.PAYMENT_NOT_SUCCEEDED, f"Payment is {intent.status.value}")

        return self._grant(intent)

    def apply_purchase_outcome(self, payment_intent_id: str, status: PaymentStatus) -> ServiceResult[Dict]:
        """Webhook entry point for intents tagged ``credit_purchase``."""
        if status != PaymentStatus.SUCCEEDED:
            record_payment("credit_purchase", succeeded=False)
            self.logger.info(f"Credit purchase {payment_intent_id} ended as {status.value}")
            return service_ok({"granted": False, "status": status.value})

        try:
            intent = self.payment_provider.retrieve_payment_intent(payment_intent_id)
        except PaymentException as e:
            self.logger.error(f"Could not retrieve intent {payment_intent_id}: {e}")
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Could not verify payment")
        return self._grant(intent)

    def _grant(self, intent) -> ServiceResult[Dict]:
        metadata = intent.metadata or {}
        try:
            credits = int(metadata.get("credits"))
        except (TypeError, ValueError):
            return service_err(ErrorCodes.INVALID_INPUT, "Payment is missing the credit amount")
        user_id = metadata.get("user_id")
        try:
            known_user = bool(user_id) and get_user_model().objects.filter(pk=user_id).exists()
        except (ValidationError, ValueError):
            known_user = False
        if not known_user:
            self.logger.error(f"Intent {intent.intent_id} has no valid user_id in its metadata")
            return service_err(ErrorCodes.INVALID_INPUT, "Payment is missing a valid user")

        existing = CreditTransaction.objects.filter(payment_intent_id=intent.intent_id).first()
        if existing:
            return service_ok({"granted": False, "credits": credits, "balance": get_account(user_id).balance})

        try:
            with transaction.atomic():
                account = get_account(user_id, lock=True)
                account.balance += credits
                account.save(update_fields=["balance", "updated_at"])
                CreditTransaction.objects.create(
                    user_id=user_id,
                    amount=credits,
                    transaction_type="purchase",
                    description=f"Purchased {credits} credits",
                    balance_after=account.balance,
                    payment_intent_id=intent.intent_id,
                )
        except IntegrityError:
            # Concurrent confirm and webhook: the other one granted it
            return service_ok({"granted": False, "credits": credits, "balance": get_account(user_id).balance})

        credits_purchased_total.inc(credits)
        record_payment("credit_purchase", succeeded=True)
        get_event_bus().publish_event(
            CreditsPurchasedEvent(
                user_id=str(user_id), credits=credits, balance=account.balance, payment_intent_id=intent.intent_id
            )
        )
        self.logger.info(f"Granted {credits} credits to user {user_id} ({intent.intent_id})")
        return service_ok({"granted": True, "credits": credits, "balance": account.balance})

    @BaseService.log_performance
    def admin_adjust_credits(self, admin, user_id, amount: int, description: str = "") -> ServiceResult[CreditTransaction]:
        if not is_admin(admin):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Admin access required")
        if amount == 0:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Adjustment cannot be zero")

        from django.contrib.auth import get_user_model

        if not get_user_model().objects.filter(pk=user_id).exists():
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        with transaction.atomic():
            account = get_account(user_id, lock=True)
            if account.balance + amount < 0:
                return service_err(ErrorCodes.INSUFFICIENT_CREDITS, "Balance cannot go negative")
            account.balance += amount
            account.save(update_fields=["balance", "updated_at"])
            entry = CreditTransaction.objects.create(
                user_id=user_id,
                amount=amount,
                transaction_type="admin_adjustment",
                description=description or f"Adjusted by {admin.email}",
                balance_after=account.balance,
            )

        self.logger.info(f"Admin {admin.id} adjusted credits of {user_id} by {amount:+d}")
        return service_ok(entry)
