import uuid

from django.conf import settings
from django.db import models

from utils.entities import BOOSTABLE_ENTITY_TYPES


class CreditAccount(models.Model):
    """Spendable credit balance. One row per user, created on first use."""

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="credit_account")
    balance = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "credits"

    def __str__(self):
        return f"{self.user} ({self.balance} credits)"


class CreditTransaction(models.Model):
    TRANSACTION_TYPE_CHOICES = [
        ("purchase", "Purchase"),
        ("boost", "Boost"),
        ("refund", "Refund"),
        ("admin_adjustment", "Admin Adjustment"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="credit_transactions")
    # Signed: purchases and refunds are positive, boosts negative
    amount = models.IntegerField()
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPE_CHOICES)
    description = models.CharField(max_length=255, blank=True)
    balance_after = models.PositiveIntegerField()

    payment_intent_id = models.CharField(max_length=255, null=True, blank=True, unique=True)
    reference_type = models.CharField(max_length=20, blank=True)
    reference_id = models.CharField(max_length=64, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "credits"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="credit_tx_user_created_idx"),
            models.Index(fields=["transaction_type"], name="credit_tx_type_idx"),
        ]

    def __str__(self):
        return f"{self.user} {self.amount:+d} ({self.transaction_type})"


class BoostPurchase(models.Model):
    ENTITY_TYPE_CHOICES = [(key, key.title()) for key in BOOSTABLE_ENTITY_TYPES]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="boost_purchases")
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)
    entity_id = models.CharField(max_length=64)
    plan = models.CharField(max_length=10)
    duration_days = models.PositiveIntegerField()
    credits_spent = models.PositiveIntegerField()

    starts_at = models.DateTimeField()
    expires_at = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "credits"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id", "is_active"], name="boost_entity_active_idx"),
            models.Index(fields=["is_active", "expires_at"], name="boost_active_expiry_idx"),
        ]

    def __str__(self):
        return f"{self.entity_type}:{self.entity_id} {self.plan}"
