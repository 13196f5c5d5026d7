from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from talent.models import ArtisteProfile, FreelanceHire, FreelancerProfile
from utils.serializers import DistanceFieldsMixin, StringListField


class FreelancerProfileSerializer(DistanceFieldsMixin, serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = FreelancerProfile
        fields = (
            "id",
            "user",
            "title",
            "bio",
            "skills",
            "hourly_rate",
            "currency",
            "category",
            "portfolio_url",
            "linkedin_url",
            "github_url",
            "experience_years",
            "languages",
            "availability_status",
            "rating",
            "total_reviews",
            "completed_jobs",
            "response_time_hours",
            "is_verified",
            "location",
            "city",
            "latitude",
            "longitude",
            "distance",
            "distance_display",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class FreelancerProfileWriteSerializer(serializers.ModelSerializer):
    skills = StringListField(required=False)
    languages = StringListField(required=False)

    class Meta:
        model = FreelancerProfile
        fields = (
            "title",
            "bio",
            "skills",
            "hourly_rate",
            "currency",
            "category",
            "portfolio_url",
            "linkedin_url",
            "github_url",
            "experience_years",
            "languages",
            "availability_status",
            "response_time_hours",
            "location",
            "city",
            "latitude",
            "longitude",
        )
        extra_kwargs = {"title": {"required": False}}


class ArtisteProfileSerializer(DistanceFieldsMixin, serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ArtisteProfile
        fields = (
            "id",
            "user",
            "stage_name",
            "bio",
            "category",
            "specialties",
            "hourly_rate",
            "experience_years",
            "profile_image",
            "gallery_images",
            "video_urls",
            "audio_urls",
            "website_url",
            "instagram_url",
            "facebook_url",
            "youtube_url",
            "rating",
            "total_reviews",
            "completed_events",
            "is_verified",
            "is_available",
            "location",
            "city",
            "latitude",
            "longitude",
            "is_boosted",
            "boost_score",
            "boost_expires_at",
            "distance",
            "distance_display",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ArtisteProfileWriteSerializer(serializers.ModelSerializer):
    specialties = StringListField(required=False)
    gallery_images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    video_urls = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    audio_urls = serializers.ListField(child=serializers.URLField(max_length=500), required=False)

    class Meta:
        model = ArtisteProfile
        fields = (
            "stage_name",
            "bio",
            "category",
            "specialties",
            "hourly_rate",
            "experience_years",
            "profile_image",
            "gallery_images",
            "video_urls",
            "audio_urls",
            "website_url",
            "instagram_url",
            "facebook_url",
            "youtube_url",
            "is_available",
            "location",
            "city",
            "latitude",
            "longitude",
        )
        extra_kwargs = {"stage_name": {"required": False}}


class FreelancerSummarySerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = FreelancerProfile
        fields = ("id", "user", "title", "hourly_rate", "currency", "rating")
        read_only_fields = fields


class FreelanceHireSerializer(serializers.ModelSerializer):
    freelancer = FreelancerSummarySerializer(read_only=True)
    client = UserSummarySerializer(read_only=True)

    class Meta:
        model = FreelanceHire
        fields = (
            "id",
            "freelancer",
            "client",
            "project_title",
            "project_description",
            "budget",
            "currency",
            "timeline_days",
            "status",
            "payment_status",
            "deliverables",
            "milestones",
            "contract_url",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class HireRequestSerializer(serializers.Serializer):
    project_title = serializers.CharField(max_length=200)
    project_description = serializers.CharField()
    budget = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=1)
    timeline_days = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    deliverables = StringListField(required=False)
    milestones = serializers.ListField(child=serializers.DictField(), required=False)


class HireStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["accepted", "in_progress", "completed", "cancelled"])
