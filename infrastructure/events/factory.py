import logging
from typing import Optional

from django.conf import settings

from .event_bus_interface import EventBus

logger = logging.getLogger(__name__)

_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Singleton event bus chosen by settings.EVENT_BUS_BACKEND ('redis' or 'memory')."""
    global _event_bus_instance
    if _event_bus_instance is None:
        backend = getattr(settings, "EVENT_BUS_BACKEND", "redis")
        if backend == "memory":
            from .memory_event_bus import InMemoryEventBus

            _event_bus_instance = InMemoryEventBus()
        elif backend == "redis":
            from .redis_event_bus import RedisEventBus

            _event_bus_instance = RedisEventBus()
        else:
            raise ValueError(f"Invalid event bus backend: {backend}")
        logger.info(f"Event bus initialized: {type(_event_bus_instance).__name__}")
    return _event_bus_instance


def reset_event_bus():
    global _event_bus_instance
    _event_bus_instance = None
