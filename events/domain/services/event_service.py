"""
EventService - event listing and organizer-side event management.
"""

from typing import Any, Dict, List

from django.core.exceptions import ValidationError

from events.filters import EventFilter
from events.models import Event
from utils.listing import BOOSTED_ORDERING, build_listing
from utils.rbac import can_manage
from utils.serializers import normalize_string_list
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

EVENT_SORT_ORDERS = {
    "date": ("start_date", "start_time", "-created_at"),
    "newest": ("-created_at",),
    "price_low": ("price", "start_date"),
    "price_high": ("-price", "start_date"),
    "boosted": BOOSTED_ORDERING,
}

PROTECTED_FIELDS = {
    "id",
    "organizer",
    "organizer_id",
    "current_attendees",
    "is_boosted",
    "boost_score",
    "boost_expires_at",
    "featured",
}


class EventService(BaseService):
    @BaseService.log_performance
    def list_events(self, params) -> ServiceResult[Dict]:
        queryset = Event.objects.filter(is_active=True).select_related("organizer")
        queryset = EventFilter(params, queryset=queryset).qs
        return build_listing(queryset, params, EVENT_SORT_ORDERS, default_sort="date")

    def get_event(self, event_id, user=None) -> ServiceResult[Event]:
        try:
            event = Event.objects.select_related("organizer").get(pk=event_id)
        except (Event.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")

        if not event.is_active and not (user and user.is_authenticated and can_manage(user, event.organizer_id)):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")
        return service_ok(event)

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        if "tags" in fields:
            fields["tags"] = normalize_string_list(fields["tags"])
        return fields

    @BaseService.log_performance
    def create_event(self, organizer, data: Dict[str, Any]) -> ServiceResult[Event]:
        fields = self._clean(data)
        fields.update(current_attendees=0, is_active=True, featured=False)

        event = Event.objects.create(organizer=organizer, **fields)
        self.logger.info(f"Organizer {organizer.id} created event {event.id}")
        return service_ok(event)

    @BaseService.log_performance
    def update_event(self, user, event_id, data: Dict[str, Any]) -> ServiceResult[Event]:
        result = self._get_managed(user, event_id)
        if not result.ok:
            return result
        event = result.value

        fields = self._clean(data)
        max_attendees = fields.get("max_attendees", event.max_attendees)
        if max_attendees is not None and max_attendees < event.current_attendees:
            return service_err(
                ErrorCodes.VALIDATION_ERROR,
                f"Capacity cannot drop below the {event.current_attendees} registered attendees",
            )

        for key, value in fields.items():
            setattr(event, key, value)
        event.save()
        return service_ok(event)

    @BaseService.log_performance
    def delete_event(self, user, event_id) -> ServiceResult[None]:
        result = self._get_managed(user, event_id)
        if not result.ok:
            return result
        result.value.delete()
        self.logger.info(f"User {user.id} deleted event {event_id}")
        return service_ok(None)

    def my_events(self, user) -> ServiceResult[List[Event]]:
        return service_ok(list(Event.objects.filter(organizer=user).order_by("-start_date")))

    def _get_managed(self, user, event_id) -> ServiceResult[Event]:
        try:
            event = Event.objects.get(pk=event_id)
        except (Event.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.EVENT_NOT_FOUND, "Event not found")
        if not can_manage(user, event.organizer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the organizer can modify this event")
        return service_ok(event)
