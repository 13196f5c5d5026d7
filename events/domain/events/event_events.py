from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class RegistrationCreatedEvent(DomainEvent):
    """Event: someone registered for an event. The organizer is notified."""

    def __init__(self, registration_id: str, event_id: str, event_title: str, organizer_id: str, attendee_name: str):
        super().__init__(
            event_type="event.registration_created",
            payload={
                "registration_id": registration_id,
                "event_id": event_id,
                "event_title": event_title,
                "organizer_id": organizer_id,
                "attendee_name": attendee_name,
            },
        )


@dataclass
class EventApplicationSubmittedEvent(DomainEvent):
    """Event: an artiste applied to work an event. The organizer is notified."""

    def __init__(self, application_id: str, event_id: str, event_title: str, organizer_id: str, artiste_name: str,
                 role_applied: str):
        super().__init__(
            event_type="event.application_submitted",
            payload={
                "application_id": application_id,
                "event_id": event_id,
                "event_title": event_title,
                "organizer_id": organizer_id,
                "artiste_name": artiste_name,
                "role_applied": role_applied,
            },
        )


@dataclass
class EventApplicationStatusChangedEvent(DomainEvent):
    """Event: the organizer decided on an artiste application. The artiste is notified."""

    def __init__(self, application_id: str, event_id: str, event_title: str, artiste_id: str, status: str):
        super().__init__(
            event_type="event.application_status_changed",
            payload={
                "application_id": application_id,
                "event_id": event_id,
                "event_title": event_title,
                "artiste_id": artiste_id,
                "status": status,
            },
        )
