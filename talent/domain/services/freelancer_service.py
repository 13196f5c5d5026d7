"""
FreelancerService - freelancer directory and the caller's own profile.
"""

from typing import Any, Dict

from django.core.exceptions import ValidationError

from talent.filters import FreelancerFilter
from talent.models import FreelancerProfile
from utils.listing import build_listing
from utils.serializers import normalize_string_list
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

FREELANCER_SORT_ORDERS = {
    "rating": ("-rating", "-total_reviews", "-created_at"),
    "rate_low": ("hourly_rate", "-rating"),
    "rate_high": ("-hourly_rate", "-rating"),
    "newest": ("-created_at",),
}

# Maintained by reviews, hires and admins
PROTECTED_FIELDS = {"id", "user", "user_id", "rating", "total_reviews", "completed_jobs", "is_verified"}
LIST_FIELDS = ("skills", "languages")


def clean_profile_data(data: Dict[str, Any], protected, list_fields) -> Dict[str, Any]:
    fields = {key: value for key, value in data.items() if key not in protected}
    for name in list_fields:
        if name in fields:
            fields[name] = normalize_string_list(fields[name])
    return fields


class FreelancerService(BaseService):
    @BaseService.log_performance
    def list_freelancers(self, params) -> ServiceResult[Dict]:
        queryset = FreelancerProfile.objects.select_related("user")
        queryset = FreelancerFilter(params, queryset=queryset).qs
        return build_listing(queryset, params, FREELANCER_SORT_ORDERS, default_sort="rating")

    def get_freelancer(self, profile_id) -> ServiceResult[FreelancerProfile]:
        try:
            return service_ok(FreelancerProfile.objects.select_related("user").get(pk=profile_id))
        except (FreelancerProfile.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "Freelancer profile not found")

    def get_my_profile(self, user) -> ServiceResult[FreelancerProfile]:
        profile = FreelancerProfile.objects.select_related("user").filter(user=user).first()
        if profile is None:
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "You do not have a freelancer profile")
        return service_ok(profile)

    @BaseService.log_performance
    def upsert_my_profile(self, user, data: Dict[str, Any]) -> ServiceResult[FreelancerProfile]:
        """Create the caller's profile on first save, update it afterwards."""
        fields = clean_profile_data(data, PROTECTED_FIELDS, LIST_FIELDS)
        profile = FreelancerProfile.objects.filter(user=user).first()

        title = fields.get("title", profile.title if profile else "")
        if not str(title or "").strip():
            return service_err(ErrorCodes.VALIDATION_ERROR, "A professional title is required")

        if profile is None:
            profile = FreelancerProfile.objects.create(user=user, **fields)
            self.logger.info(f"User {user.id} created freelancer profile {profile.id}")
        else:
            for key, value in fields.items():
                setattr(profile, key, value)
            profile.save()
        return service_ok(profile)

    def delete_my_profile(self, user) -> ServiceResult[None]:
        deleted, _ = FreelancerProfile.objects.filter(user=user).delete()
        if not deleted:
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "You do not have a freelancer profile")
        return service_ok(None)
