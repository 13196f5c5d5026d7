from .domain_event import DomainEvent
from .event_bus_interface import EventBus
from .factory import get_event_bus, reset_event_bus

__all__ = ["DomainEvent", "EventBus", "get_event_bus", "reset_event_bus"]
