"""
OrderService - Order Lifecycle Management

Buyer and seller order views plus seller-driven status transitions.

State Machine:
    processing -> confirmed (payment) -> shipped -> delivered
    pending/processing/confirmed -> cancelled (unpaid orders only)
"""

from typing import Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from infrastructure.events import get_event_bus
from marketplace.domain.events import OrderStatusChangedEvent
from marketplace.models import Order
from utils.pagination import paginate
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

ALLOWED_TRANSITIONS = {
    "pending": {"cancelled"},
    "processing": {"cancelled"},
    "confirmed": {"shipped", "cancelled"},
    "shipped": {"delivered"},
}

ORDER_STATUSES = {choice[0] for choice in Order.STATUS_CHOICES}


class OrderService(BaseService):
    @BaseService.log_performance
    def list_orders(
        self, user, role: str = "buyer", status: Optional[str] = None, page: int = 1, page_size: int = 20
    ) -> ServiceResult[Dict]:
        """
        List orders placed by the user (role=buyer) or received for their products (role=seller).
        """
        if role not in ("buyer", "seller"):
            return service_err(ErrorCodes.INVALID_INPUT, "role must be buyer or seller")
        if status and status not in ORDER_STATUSES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown order status '{status}'")

        queryset = Order.objects.select_related("product", "buyer", "seller")
        queryset = queryset.filter(buyer=user) if role == "buyer" else queryset.filter(seller=user)
        if status:
            queryset = queryset.filter(status=status)

        return service_ok(paginate(queryset.order_by("-created_at"), page, page_size))

    def get_order(self, user, order_id) -> ServiceResult[Order]:
        try:
            order = Order.objects.select_related("product", "buyer", "seller").get(pk=order_id)
        except (Order.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

        if user.pk not in (order.buyer_id, order.seller_id) and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot view this order")
        return service_ok(order)

    @BaseService.log_performance
    @transaction.atomic
    def update_order_status(
        self, user, order_id, new_status: str, tracking_number: Optional[str] = None
    ) -> ServiceResult[Order]:
        try:
            order = Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

        if order.seller_id != user.pk and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the seller can update this order")

        if new_status not in ALLOWED_TRANSITIONS.get(order.status, set()):
            return service_err(
                ErrorCodes.INVALID_STATUS_TRANSITION,
                f"Cannot move order from '{order.status}' to '{new_status}'",
            )
        if new_status == "cancelled" and order.payment_status == "paid":
            return service_err(ErrorCodes.ORDER_ALREADY_PAID, "Paid orders cannot be cancelled")

        old_status = order.status
        order.status = new_status
        update_fields = ["status", "updated_at"]
        if tracking_number is not None:
            order.tracking_number = tracking_number
            update_fields.append("tracking_number")
        order.save(update_fields=update_fields)

        get_event_bus().publish_event(
            OrderStatusChangedEvent(
                order_id=str(order.id),
                buyer_id=str(order.buyer_id),
                old_status=old_status,
                new_status=new_status,
                tracking_number=order.tracking_number,
            )
        )
        self.logger.info(f"Order {order.id}: {old_status} -> {new_status} by {user.id}")
        return service_ok(order)
