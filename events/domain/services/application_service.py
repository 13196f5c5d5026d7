"""
EventApplicationService - artistes applying to work events.
"""

from typing import Any, Dict, List

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from events.domain.events import EventApplicationStatusChangedEvent, EventApplicationSubmittedEvent
from events.models import Event, EventApplication
from infrastructure.events import get_event_bus
from talent.models import ArtisteProfile
from utils.rbac import can_manage
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

APPLICATION_STATUSES = {choice[0] for choice in EventApplication.STATUS_CHOICES}


class EventApplicationService(BaseService):
    @BaseService.log_performance
    def apply_to_event(self, user, event_id, data: Dict[str, Any]) -> ServiceResult[EventApplication]:
        role_applied = str(data.get("role_applied") or "").strip()
        proposal = str(data.get("proposal") or "").strip()
        if not role_applied or not proposal:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Role and proposal are required")

        try:
            event = Event.objects.get(pk=event_id, is_active=True)
        except (Event.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")

        if event.organizer_id == user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot apply to your own event")
        if EventApplication.objects.filter(event=event, artiste=user).exists():
            return service_err(ErrorCodes.ALREADY_APPLIED, "You have already applied to this event")

        profile = ArtisteProfile.objects.filter(user=user).first()
        try:
            with transaction.atomic():
                application = EventApplication.objects.create(
                    event=event,
                    artiste=user,
                    artiste_profile=profile,
                    role_applied=role_applied,
                    proposal=proposal,
                    quoted_price=data.get("quoted_price"),
                )
        except IntegrityError:
            return service_err(ErrorCodes.ALREADY_APPLIED, "You have already applied to this event")

        get_event_bus().publish_event(
            EventApplicationSubmittedEvent(
                application_id=str(application.id),
                event_id=str(event.id),
                event_title=event.title,
                organizer_id=str(event.organizer_id),
                artiste_name=profile.stage_name if profile else user.display_name,
                role_applied=role_applied,
            )
        )
        return service_ok(application)

    def list_event_applications(self, user, event_id) -> ServiceResult[List[EventApplication]]:
        try:
            event = Event.objects.get(pk=event_id)
        except (Event.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")
        if not can_manage(user, event.organizer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the organizer can view applications")
        return service_ok(list(event.applications.select_related("artiste", "artiste_profile")))

    def my_event_applications(self, user) -> ServiceResult[List[EventApplication]]:
        return service_ok(list(EventApplication.objects.filter(artiste=user).select_related("event")))

    @BaseService.log_performance
    def update_event_application_status(self, user, application_id, status: str) -> ServiceResult[EventApplication]:
        if status not in APPLICATION_STATUSES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown application status '{status}'")
        try:
            application = EventApplication.objects.select_related("event").get(pk=application_id)
        except (EventApplication.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.APPLICATION_NOT_FOUND, "Application not found")

        if not can_manage(user, application.event.organizer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the organizer can update applications")

        application.status = status
        application.save(update_fields=["status", "updated_at"])

        get_event_bus().publish_event(
            EventApplicationStatusChangedEvent(
                application_id=str(application.id),
                event_id=str(application.event_id),
                event_title=application.event.title,
                artiste_id=str(application.artiste_id),
                status=status,
            )
        )
        return service_ok(application)
