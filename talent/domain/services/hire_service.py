"""
HireService - clients hiring freelancers.

State Machine:
    pending -> accepted -> in_progress -> completed
    pending/accepted/in_progress -> cancelled (freelancer)
    pending -> cancelled (client)

Completing a hire increments the freelancer's completed_jobs.
"""

from typing import List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from infrastructure.events import get_event_bus
from talent.domain.events import HireRequestedEvent, HireStatusChangedEvent
from talent.models import FreelanceHire, FreelancerProfile
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

FREELANCER_TRANSITIONS = {
    "pending": {"accepted", "cancelled"},
    "accepted": {"in_progress", "cancelled"},
    "in_progress": {"completed", "cancelled"},
}
CLIENT_TRANSITIONS = {
    "pending": {"cancelled"},
}

HIRE_FIELDS = ("project_title", "project_description", "budget", "currency", "timeline_days", "deliverables", "milestones")


class HireService(BaseService):
    @BaseService.log_performance
    def hire_freelancer(self, client, profile_id, data) -> ServiceResult[FreelanceHire]:
        try:
            profile = FreelancerProfile.objects.get(pk=profile_id)
        except (FreelancerProfile.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PROFILE_NOT_FOUND, "Freelancer profile not found")

        if profile.user_id == client.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot hire yourself")

        fields = {name: data[name] for name in HIRE_FIELDS if data.get(name) is not None}
        fields.setdefault("currency", profile.currency)
        hire = FreelanceHire.objects.create(freelancer=profile, client=client, **fields)

        get_event_bus().publish_event(
            HireRequestedEvent(
                hire_id=str(hire.id),
                freelancer_user_id=str(profile.user_id),
                client_name=client.display_name,
                project_title=hire.project_title,
                budget=hire.budget,
            )
        )
        self.logger.info(f"Client {client.id} sent hire request {hire.id} to freelancer {profile.id}")
        return service_ok(hire)

    def list_hires(self, user, role: str = "client") -> ServiceResult[List[FreelanceHire]]:
        queryset = FreelanceHire.objects.select_related("freelancer", "freelancer__user", "client")
        if role == "client":
            return service_ok(list(queryset.filter(client=user)))
        if role == "freelancer":
            return service_ok(list(queryset.filter(freelancer__user=user)))
        return service_err(ErrorCodes.INVALID_INPUT, "role must be client or freelancer")

    @BaseService.log_performance
    @transaction.atomic
    def update_hire_status(self, user, hire_id, new_status: str) -> ServiceResult[FreelanceHire]:
        try:
            hire = FreelanceHire.objects.select_for_update().select_related("freelancer").get(pk=hire_id)
        except (FreelanceHire.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.HIRE_NOT_FOUND, "Hire not found")

        freelancer_user_id = hire.freelancer.user_id
        if user.pk == freelancer_user_id:
            transitions, recipient_id = FREELANCER_TRANSITIONS, hire.client_id
        elif user.pk == hire.client_id:
            transitions, recipient_id = CLIENT_TRANSITIONS, freelancer_user_id
        elif is_admin(user):
            transitions, recipient_id = FREELANCER_TRANSITIONS, hire.client_id
        else:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You are not part of this hire")

        if new_status not in transitions.get(hire.status, set()):
            return service_err(
                ErrorCodes.INVALID_STATUS_TRANSITION,
                f"Cannot move hire from '{hire.status}' to '{new_status}'",
            )

        hire.status = new_status
        hire.save(update_fields=["status", "updated_at"])
        if new_status == "completed":
            FreelancerProfile.objects.filter(pk=hire.freelancer_id).update(completed_jobs=F("completed_jobs") + 1)

        get_event_bus().publish_event(
            HireStatusChangedEvent(
                hire_id=str(hire.id),
                recipient_id=str(recipient_id),
                project_title=hire.project_title,
                status=new_status,
            )
        )
        return service_ok(hire)
