from rest_framework import serializers

from authentication.models import CustomUser
from credits.api.serializers import BoostPurchaseSerializer, CreditTransactionSerializer


class PlatformStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_products = serializers.IntegerField()
    total_jobs = serializers.IntegerField()
    total_events = serializers.IntegerField()
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    active_boosts = serializers.IntegerField()
    new_users_today = serializers.IntegerField()
    total_credits_in_circulation = serializers.IntegerField()


class DailyCountsSerializer(serializers.Serializer):
    users = serializers.IntegerField()
    products = serializers.IntegerField()
    jobs = serializers.IntegerField()
    events = serializers.IntegerField()
    orders = serializers.IntegerField()


class AnalyticsDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    new = DailyCountsSerializer()
    total = DailyCountsSerializer()


class AnalyticsSerializer(serializers.Serializer):
    days = serializers.IntegerField()
    series = AnalyticsDaySerializer(many=True)


class AdminUserSerializer(serializers.ModelSerializer):
    credit_balance = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "email",
            "username",
            "full_name",
            "user_type",
            "is_admin",
            "is_disabled",
            "is_verified",
            "credit_balance",
            "created_at",
        )
        read_only_fields = fields

    def get_credit_balance(self, obj) -> int:
        if hasattr(obj, "credit_balance"):
            return obj.credit_balance
        account = getattr(obj, "credit_account", None)
        return account.balance if account else 0


class AdminListingSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    entity_type = serializers.CharField()
    title = serializers.CharField()
    owner_id = serializers.UUIDField()
    owner_email = serializers.EmailField()
    is_active = serializers.BooleanField()
    is_boosted = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class ListingStateSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    entity_type = serializers.CharField()
    is_active = serializers.BooleanField()


class AdminCreditTransactionSerializer(CreditTransactionSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta(CreditTransactionSerializer.Meta):
        fields = CreditTransactionSerializer.Meta.fields + ("user_id", "user_email")
        read_only_fields = fields


class AdminBoostSerializer(BoostPurchaseSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta(BoostPurchaseSerializer.Meta):
        fields = BoostPurchaseSerializer.Meta.fields + ("user_id", "user_email")
        read_only_fields = fields
