from rest_framework import serializers

from credits.domain.services.boost_service import BOOST_PLANS
from credits.domain.services.credit_service import CREDIT_PACKAGES
from credits.models import BoostPurchase, CreditTransaction
from utils.entities import BOOSTABLE_ENTITY_TYPES


class BalanceSerializer(serializers.Serializer):
    balance = serializers.IntegerField()


class CreditTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CreditTransaction
        fields = (
            "id",
            "amount",
            "transaction_type",
            "description",
            "balance_after",
            "payment_intent_id",
            "reference_type",
            "reference_id",
            "created_at",
        )
        read_only_fields = fields


class CreditPackageSerializer(serializers.Serializer):
    credits = serializers.IntegerField()
    price = serializers.IntegerField()


class BoostPlanSerializer(serializers.Serializer):
    plan = serializers.CharField()
    days = serializers.IntegerField()
    credits = serializers.IntegerField()


class PurchaseCreditsRequestSerializer(serializers.Serializer):
    credits = serializers.ChoiceField(choices=sorted(CREDIT_PACKAGES))


class PurchaseCreditsResponseSerializer(serializers.Serializer):
    client_secret = serializers.CharField()
    payment_intent_id = serializers.CharField()
    credits = serializers.IntegerField()
    price = serializers.IntegerField()


class ConfirmPurchaseRequestSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)


class ConfirmPurchaseResponseSerializer(serializers.Serializer):
    granted = serializers.BooleanField()
    credits = serializers.IntegerField()
    balance = serializers.IntegerField()


class BoostRequestSerializer(serializers.Serializer):
    entity_type = serializers.ChoiceField(choices=BOOSTABLE_ENTITY_TYPES)
    entity_id = serializers.CharField(max_length=64)
    plan = serializers.ChoiceField(choices=list(BOOST_PLANS))


class BoostPurchaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = BoostPurchase
        fields = (
            "id",
            "entity_type",
            "entity_id",
            "plan",
            "duration_days",
            "credits_spent",
            "starts_at",
            "expires_at",
            "is_active",
            "created_at",
        )
        read_only_fields = fields


class AdminAdjustRequestSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    amount = serializers.IntegerField()
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
