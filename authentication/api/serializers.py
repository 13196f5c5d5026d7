from rest_framework import serializers

from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    """Full profile of the authenticated user."""

    display_name = serializers.ReadOnlyField()

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "email",
            "username",
            "full_name",
            "display_name",
            "avatar_url",
            "phone",
            "bio",
            "location",
            "city",
            "state",
            "country",
            "latitude",
            "longitude",
            "social_links",
            "user_type",
            "is_verified",
            "is_admin",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    bio = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    country = serializers.CharField(max_length=100, required=False, allow_blank=True)
    latitude = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True, min_value=-90, max_value=90
    )
    longitude = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True, min_value=-180, max_value=180
    )
    social_links = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)
    user_type = serializers.ChoiceField(choices=CustomUser.USER_TYPE_CHOICES, required=False)


class PublicUserSerializer(serializers.ModelSerializer):
    display_name = serializers.ReadOnlyField()

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "full_name",
            "display_name",
            "avatar_url",
            "bio",
            "location",
            "city",
            "state",
            "country",
            "social_links",
            "user_type",
            "is_verified",
            "created_at",
        )
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user card embedded in other resources (sellers, participants, reviewers)."""

    display_name = serializers.ReadOnlyField()

    class Meta:
        model = CustomUser
        fields = ("id", "full_name", "display_name", "avatar_url", "city", "is_verified")
        read_only_fields = fields


class AvatarUploadSerializer(serializers.Serializer):
    avatar = serializers.ImageField()
