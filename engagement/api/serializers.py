from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from engagement.models import Review
from utils.entities import ENTITY_TYPE_CHOICES


class EntityRefSerializer(serializers.Serializer):
    entity_type = serializers.ChoiceField(choices=ENTITY_TYPE_CHOICES)
    entity_id = serializers.CharField(max_length=64)


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = (
            "id",
            "reviewer",
            "entity_type",
            "entity_id",
            "rating",
            "title",
            "comment",
            "is_verified_purchase",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ReviewSubmitSerializer(EntityRefSerializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    comment = serializers.CharField(required=False, allow_blank=True)


class ReviewListResponseSerializer(serializers.Serializer):
    results = ReviewSerializer(many=True)
    average_rating = serializers.DecimalField(max_digits=3, decimal_places=2)
    total_reviews = serializers.IntegerField()
    distribution = serializers.DictField(child=serializers.IntegerField())


class EntitySummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    entity_type = serializers.CharField()
    title = serializers.CharField()
    price = serializers.CharField(allow_null=True)
    image = serializers.CharField(allow_null=True)
    location = serializers.CharField(allow_blank=True)
    link = serializers.CharField()


class WishlistItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    entity_type = serializers.CharField()
    entity_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    entity = EntitySummarySerializer()


class WishlistStateSerializer(serializers.Serializer):
    wishlisted = serializers.BooleanField()
