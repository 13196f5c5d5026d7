"""
ArtisteService - artiste directory (boosted first) and the caller's own profile.
"""

from typing import Any, Dict

from django.core.exceptions import ValidationError

from talent.filters import ArtisteFilter
from talent.models import ArtisteProfile
from utils.listing import build_listing
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .freelancer_service import clean_profile_data

ARTISTE_SORT_ORDERS = {
    "boosted": ("-is_boosted", "-boost_score", "-rating", "-created_at"),
    "rating": ("-rating", "-total_reviews"),
    "newest": ("-created_at",),
}

PROTECTED_FIELDS = {
    "id",
    "user",
    "user_id",
    "rating",
    "total_reviews",
    "completed_events",
    "is_verified",
    "is_boosted",
    "boost_score",
    "boost_expires_at",
}
LIST_FIELDS = ("specialties",)


class ArtisteService(BaseService):
    @BaseService.log_performance
    def list_artistes(self, params) -> ServiceResult[Dict]:
        queryset = ArtisteProfile.objects.select_related("user")
        queryset = ArtisteFilter(params, queryset=queryset).qs
        return build_listing(queryset, params, ARTISTE_SORT_ORDERS, default_sort="boosted")

    def get_artiste(self, profile_id) -> ServiceResult[ArtisteProfile]:
        try:
            return service_ok(ArtisteProfile.objects.select_related("user").get(pk=profile_id))
        except (ArtisteProfile.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "Artiste profile not found")

    def get_my_profile(self, user) -> ServiceResult[ArtisteProfile]:
        profile = ArtisteProfile.objects.select_related("user").filter(user=user).first()
        if profile is None:
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "You do not have an artiste profile")
        return service_ok(profile)

    @BaseService.log_performance
    def upsert_my_profile(self, user, data: Dict[str, Any]) -> ServiceResult[ArtisteProfile]:
        fields = clean_profile_data(data, PROTECTED_FIELDS, LIST_FIELDS)
        profile = ArtisteProfile.objects.filter(user=user).first()

        stage_name = fields.get("stage_name", profile.stage_name if profile else "")
        if not str(stage_name or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "A stage name is required")

        if profile is None:
            profile = ArtisteProfile.objects.create(user=user, **fields)
            self.logger.info(f"User {user.id} created artiste profile {profile.id}")
        else:
            for key, value in fields.items():
                setattr(profile, key, value)
            profile.save()
        return service_ok(profile)

    def delete_my_profile(self, user) -> ServiceResult[None]:
        deleted, _ = ArtisteProfile.objects.filter(user=user).delete()
        if not deleted:
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "You do not have an artiste profile")
        return service_ok(None)
