from .hire_events import HireRequestedEvent, HireStatusChangedEvent

__all__ = ["HireRequestedEvent", "HireStatusChangedEvent"]
