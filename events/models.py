from events.domain.models import Event, EventApplication, EventRegistration

__all__ = ["Event", "EventApplication", "EventRegistration"]
