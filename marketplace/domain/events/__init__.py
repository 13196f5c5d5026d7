from .order_events import OrderPlacedEvent, OrderStatusChangedEvent

__all__ = ["OrderPlacedEvent", "OrderStatusChangedEvent"]
