from dataclasses import dataclass
from decimal import Decimal

from infrastructure.events import DomainEvent


@dataclass
class OrderPlacedEvent(DomainEvent):
    """Event: an order was paid for. Consumed by notifications (to the seller)."""

    def __init__(self, order_id: str, buyer_id: str, seller_id: str, product_title: str, total_price: Decimal):
        super().__init__(
            event_type="order.placed",
            payload={
                "order_id": order_id,
                "buyer_id": buyer_id,
                "seller_id": seller_id,
                "product_title": product_title,
                "total_price": str(total_price),
            },
        )


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """Event: seller moved an order along (shipped, delivered, cancelled)."""

    def __init__(self, order_id: str, buyer_id: str, old_status: str, new_status: str, tracking_number: str = ""):
        super().__init__(
            event_type="order.status_changed",
            payload={
                "order_id": order_id,
                "buyer_id": buyer_id,
                "old_status": old_status,
                "new_status": new_status,
                "tracking_number": tracking_number,
            },
        )
