import logging
from collections import defaultdict
from typing import Callable

from django.utils import timezone

from .event_bus_interface import EventBus

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Synchronous in-process dispatch. Used in tests and single-process dev servers."""

    def __init__(self):
        self._subscribers = defaultdict(list)
        self.published = []

    def publish(self, event_type: str, payload: dict):
        envelope = {"event_type": event_type, "occurred_at": timezone.now().isoformat(), "payload": payload}
        self.published.append(envelope)
        logger.info(f"Published event: {event_type}")

        for handler in self._subscribers.get(event_type, []):
            try:
                handler(envelope)
            except Exception as e:
                logger.error(f"Handler error for {event_type}: {str(e)}", exc_info=True)

    def subscribe(self, event_type: str, handler: Callable):
        if handler not in self._subscribers[event_type]:
            self._subscribers[event_type].append(handler)
            logger.debug(f"Registered handler for event: {event_type}")

    def clear_published(self):
        self.published.clear()
