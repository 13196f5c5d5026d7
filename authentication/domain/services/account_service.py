"""
AccountService - local accounts mirrored from the hosted identity provider.

Handles provisioning on first sight of a token, profile reads/updates, avatar
uploads and the user search used by messaging.
"""

import uuid
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Q

from authentication.domain.models import CustomUser
from infrastructure.observability.metrics import users_provisioned_total
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

EDITABLE_PROFILE_FIELDS = (
    "full_name",
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
)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10


class AccountService(BaseService):
    def __init__(self, media_service=None):
        super().__init__()
        self._media_service = media_service

    @property
    def media_service(self):
        if self._media_service is None:
            from infrastructure.container import container

            self._media_service = container.media_upload_service()
        return self._media_service

    def get_or_provision_user(self, claims: Dict[str, Any]) -> ServiceResult[CustomUser]:
        """
        Resolve verified token claims to a local user, creating the row on first sight.

        The local primary key is the provider's ``sub``. Disabled accounts are rejected.
        """
        try:
            user_id = uuid.UUID(str(claims.get("sub")))
        except (TypeError, ValueError):
            return service_err(ErrorCodes.INVALID_INPUT, "Token subject is not a valid user id")

        user = CustomUser.objects.filter(pk=user_id).first()
        if user is None:
            email = (claims.get("email") or "").strip().lower()
            if not email:
                return service_err(ErrorCodes.INVALID_INPUT, "Token carries no email claim")
            metadata = claims.get("user_metadata") or {}
            try:
                with transaction.atomic():
                    user, created = CustomUser.objects.get_or_create(
                        pk=user_id,
                        defaults={
                            "email": email,
                            "username": email,
                            "full_name": metadata.get("full_name", "") or "",
                        },
                    )
                    if created:
                        user.set_unusable_password()
                        user.save(update_fields=["password"])
                        users_provisioned_total.inc()
                        self.logger.info(f"Provisioned local user {user.id}")
            except IntegrityError:
                # Concurrent first request for the same sub, or email already mapped to another id
                user = CustomUser.objects.filter(pk=user_id).first()
                if user is None:
                    self.logger.warning(f"Email {email} already belongs to another account")
                    return service_err(ErrorCodes.CONFLICT, "Email already registered to another account")

        if user.is_disabled or not user.is_active:
            return service_err(ErrorCodes.PERMISSION_DENIED, "Account is disabled")
        return service_ok(user)

    @BaseService.log_performance
    def update_profile(self, user: CustomUser, data: Dict[str, Any]) -> ServiceResult[CustomUser]:
        updates = {key: value for key, value in data.items() if key in EDITABLE_PROFILE_FIELDS}

        if updates.get("user_type") == "admin" and not user.has_admin_access:
            return service_err(ErrorCodes.PERMISSION_DENIED, "Cannot assign the admin role to yourself")

        for key, value in updates.items():
            setattr(user, key, value)
        if updates:
            user.save(update_fields=list(updates) + ["updated_at"])
        return service_ok(user)

    @BaseService.log_performance
    def set_avatar(self, user: CustomUser, upload) -> ServiceResult[CustomUser]:
        result = self.media_service.upload_images(user, "avatars", [upload])
        if not result.ok:
            return result
        user.avatar_url = result.value[0]
        user.save(update_fields=["avatar_url", "updated_at"])
        return service_ok(user)

    def get_public_profile(self, user_id) -> ServiceResult[CustomUser]:
        try:
            user = CustomUser.objects.get(pk=user_id, is_disabled=False)
        except (CustomUser.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        return service_ok(user)

    def search_users(self, user: CustomUser, query: Optional[str]) -> ServiceResult[List[CustomUser]]:
        query = (query or "").strip()
        if len(query) < SEARCH_MIN_LENGTH:
            return service_ok([])

        users = (
            CustomUser.objects.filter(Q(full_name__icontains=query) | Q(email__icontains=query))
            .filter(is_disabled=False)
            .exclude(pk=user.pk)
            .order_by("full_name")[:SEARCH_LIMIT]
        )
        return service_ok(list(users))
