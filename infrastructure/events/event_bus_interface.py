from abc import ABC, abstractmethod
from typing import Callable


class EventBus(ABC):
    """Publish/subscribe contract for domain events.

    Handlers receive the event envelope:
    {"event_type": str, "occurred_at": iso8601, "payload": dict}
    """

    @abstractmethod
    def publish(self, event_type: str, payload: dict):
        """Publish an event. Must never raise into business logic."""

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable):
        """Register a handler for an event type."""

    def start_listening(self, block: bool = False):
        """Begin consuming events, for transports that need a consumer loop."""

    def publish_event(self, event):
        """Publish a DomainEvent instance."""
        self.publish(event.event_type, event.payload)
