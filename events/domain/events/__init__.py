from .event_events import (
    EventApplicationStatusChangedEvent,
    EventApplicationSubmittedEvent,
    RegistrationCreatedEvent,
)

__all__ = ["EventApplicationStatusChangedEvent", "EventApplicationSubmittedEvent", "RegistrationCreatedEvent"]
