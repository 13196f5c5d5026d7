"""
RegistrationService - attendee registrations, cancellations and check-in.

Capacity is enforced under a row lock on the event so concurrent
registrations cannot oversell it. Free events confirm immediately; paid
events hold a seat in pending_payment until payment is settled.
"""

from typing import Any, Dict, List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from events.domain.events import RegistrationCreatedEvent
from events.models import Event, EventRegistration
from infrastructure.events import get_event_bus
from utils.rbac import can_manage
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class RegistrationService(BaseService):
    @BaseService.log_performance
    def register(self, user, event_id, data: Dict[str, Any]) -> ServiceResult[EventRegistration]:
        quantity = int(data.get("quantity") or 1)

        with transaction.atomic():
            try:
                event = Event.objects.select_for_update().get(pk=event_id, is_active=True)
            except (Event.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")

            existing = EventRegistration.objects.select_for_update().filter(event=event, attendee=user).first()
            if existing and existing.status != "cancelled":
                return service_err(ErrorCodes.ALREADY_REGISTERED, "You are already registered for this event")

            if event.max_attendees is not None and event.current_attendees + quantity > event.max_attendees:
                return service_err(ErrorCodes.EVENT_SOLD_OUT, "This event is sold out")

            fields = {
                "full_name": data.get("full_name") or user.full_name,
                "email": data.get("email") or user.email,
                "phone": data.get("phone") or "",
                "special_requests": data.get("special_requests") or "",
                "ticket_type": data.get("ticket_type") or "regular",
                "quantity": quantity,
                "total_price": event.price * quantity,
                "status": "confirmed" if event.is_free else "pending_payment",
                "payment_status": "paid" if event.is_free else "pending",
                "attended": False,
                "check_in_time": None,
            }
            if existing:
                # Re-registering after a cancellation reuses the row
                for key, value in fields.items():
                    setattr(existing, key, value)
                existing.save()
                registration = existing
            else:
                registration = EventRegistration.objects.create(event=event, attendee=user, **fields)

            event.current_attendees += quantity
            event.save(update_fields=["current_attendees", "updated_at"])

        get_event_bus().publish_event(
            RegistrationCreatedEvent(
                registration_id=str(registration.id),
                event_id=str(event.id),
                event_title=event.title,
                organizer_id=str(event.organizer_id),
                attendee_name=registration.full_name,
            )
        )
        self.logger.info(f"User {user.id} registered for event {event.id} ({registration.status})")
        return service_ok(registration)

    @BaseService.log_performance
    def cancel_registration(self, user, registration_id) -> ServiceResult[EventRegistration]:
        with transaction.atomic():
            try:
                registration = EventRegistration.objects.select_for_update().get(pk=registration_id)
            except (EventRegistration.DoesNotExist, ValidationError, ValueError):
                return service_err(ErrorCodes.REGISTRATION_NOT_FOUND, "Registration not found")

            if registration.attendee_id != user.pk:
                return service_err(ErrorCodes.PERMISSION_DENIED, "You can only cancel your own registration")
            if registration.status == "cancelled":
                return service_err(ErrorCodes.INVALID_STATUS_TRANSITION, "Registration is already cancelled")

            event = Event.objects.select_for_update().get(pk=registration.event_id)
            event.current_attendees = max(event.current_attendees - registration.quantity, 0)
            event.save(update_fields=["current_attendees", "updated_at"])

            registration.status = "cancelled"
            registration.save(update_fields=["status", "updated_at"])

        return service_ok(registration)

    def list_registrations(self, user, event_id) -> ServiceResult[List[EventRegistration]]:
        try:
            event = Event.objects.get(pk=event_id)
        except (Event.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")
        if not can_manage(user, event.organizer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the organizer can view registrations")
        return service_ok(list(event.registrations.select_related("attendee").order_by("-created_at")))

    def my_registrations(self, user) -> ServiceResult[List[EventRegistration]]:
        return service_ok(
            list(EventRegistration.objects.filter(attendee=user).select_related("event").order_by("-created_at"))
        )

    @BaseService.log_performance
    def check_in(self, user, registration_id) -> ServiceResult[EventRegistration]:
        try:
            registration = EventRegistration.objects.select_related("event").get(pk=registration_id)
        except (EventRegistration.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.REGISTRATION_NOT_FOUND, "Registration not found")

        if not can_manage(user, registration.event.organizer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the organizer can check attendees in")
        if registration.status == "cancelled":
            return service_err(ErrorCodes.INVALID_STATUS_TRANSITION, "Cancelled registrations cannot check in")

        if not registration.attended:
            registration.attended = True
            registration.check_in_time = timezone.now()
            registration.save(update_fields=["attended", "check_in_time", "updated_at"])
        return service_ok(registration)
