"""
CheckoutService - cart to orders to payment intent.

Flow:
    checkout()         -> one Order per cart line (processing/pending) + one payment intent
    client confirms the intent with the gateway SDK
    confirm_payment()  -> reads the intent back and applies the outcome
    webhook            -> same outcome, driven by the gateway

Applying an outcome is idempotent: paid orders are never re-processed.
"""

import time
from decimal import Decimal
from typing import Dict, List, Optional

from django.conf import settings
from django.db import transaction

from infrastructure.events import get_event_bus
from infrastructure.observability.metrics import (
    checkout_duration,
    checkout_total,
    orders_created_total,
    record_payment,
)
from infrastructure.observability.tracing import add_span_attributes, get_tracer
from infrastructure.payments import PaymentException, PaymentProviderInterface, PaymentStatus, to_minor_units
from marketplace.domain.events import OrderPlacedEvent
from marketplace.models import CartItem, Order, Product
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .cart_service import CartService
from .pricing_service import PricingService

REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "country")
ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "country")

tracer = get_tracer(__name__)


class CheckoutService(BaseService):
    def __init__(
        self,
        cart_service: Optional[CartService] = None,
        pricing_service: Optional[PricingService] = None,
        payment_provider: Optional[PaymentProviderInterface] = None,
    ):
        super().__init__()
        self.pricing_service = pricing_service or PricingService()
        self.cart_service = cart_service or CartService(pricing_service=self.pricing_service)
        if payment_provider is None:
            from infrastructure.container import container

            payment_provider = container.payment()
        self.payment_provider = payment_provider

    @staticmethod
    def validate_address(address) -> Optional[str]:
        if not isinstance(address, dict):
            return "Delivery address is required"
        missing = [name for name in REQUIRED_ADDRESS_FIELDS if not str(address.get(name) or "").strip()]
        if missing:
            return f"Delivery address is missing: {', '.join(missing)}"
        return None

    @BaseService.log_performance
    def checkout(self, user, delivery_address: Dict, notes: str = "") -> ServiceResult[Dict]:
        """
        Create orders for every cart line and a single payment intent for the total.

        Returns:
            ServiceResult with {client_secret, payment_intent_id, order_ids, subtotal, shipping, total}
        """
        started = time.time()
        with tracer.start_as_current_span("checkout") as span:
            add_span_attributes(span, user_id=user.id)

            cart_result = self.cart_service.get_cart(user)
            if not cart_result.ok:
                return cart_result
            cart = cart_result.value
            if not cart["items"]:
                return service_err(ErrorCodes.CART_EMPTY, "Your cart is empty")

            problem = self.validate_address(delivery_address)
            if problem:
                return service_err(ErrorCodes.INVALID_ADDRESS, problem)
            address = {name: str(delivery_address.get(name) or "").strip() for name in ADDRESS_FIELDS}

            for line in cart["items"]:
                error = self.cart_service.validate_line(user, line["product"], line["quantity"])
                if error:
                    return error

            orders = self._create_orders(user, cart, address, notes)
            order_ids = [str(order.id) for order in orders]
            add_span_attributes(span, order_count=len(orders), total=cart["total"])

            try:
                intent = self.payment_provider.create_payment_intent(
                    amount=cart["total"],
                    currency=getattr(settings, "PAYMENT_CURRENCY", "cad"),
                    metadata={"type": "order", "order_ids": order_ids, "user_id": str(user.id)},
                    customer_email=user.email,
                )
            except PaymentException as e:
                Order.objects.filter(id__in=order_ids).update(status="cancelled", payment_status="failed")
                checkout_total.labels(status="failed").inc()
                self.logger.error(f"Payment intent creation failed for user {user.id}: {e}")
                return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Payment could not be initiated")

            Order.objects.filter(id__in=order_ids).update(payment_intent_id=intent.intent_id)

        orders_created_total.inc(len(orders))
        checkout_total.labels(status="initiated").inc()
        checkout_duration.observe(time.time() - started)
        self.logger.info(f"Checkout for user {user.id}: {len(orders)} orders, intent {intent.intent_id}")

        return service_ok(
            {
                "client_secret": intent.client_secret,
                "payment_intent_id": intent.intent_id,
                "order_ids": order_ids,
                "subtotal": cart["subtotal"],
                "shipping": cart["shipping"],
                "total": cart["total"],
            }
        )

    @transaction.atomic
    def _create_orders(self, user, cart: Dict, address: Dict, notes: str) -> List[Order]:
        orders = []
        for position, line in enumerate(cart["items"]):
            product = line["product"]
            orders.append(
                Order.objects.create(
                    buyer=user,
                    seller_id=product.seller_id,
                    product=product,
                    quantity=line["quantity"],
                    unit_price=product.price,
                    total_price=line["line_total"],
                    # Shipping is charged once per checkout
                    delivery_fee=cart["shipping"] if position == 0 else Decimal("0"),
                    status="processing",
                    payment_status="pending",
                    delivery_address=address,
                    notes=notes or "",
                )
            )
        return orders

    @BaseService.log_performance
    def confirm_payment(self, user, payment_intent_id: str) -> ServiceResult[Dict]:
        """Buyer-triggered confirmation after the client SDK reports completion."""
        if not Order.objects.filter(payment_intent_id=payment_intent_id).exists():
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "No orders for this payment")
        if Order.objects.filter(payment_intent_id=payment_intent_id).exclude(buyer=user).exists():
            return service_err(ErrorCodes.PERMISSION_DENIED, "This payment belongs to another user")

        try:
            intent = self.payment_provider.retrieve_payment_intent(payment_intent_id)
        except PaymentException as e:
            self.logger.error(f"Could not retrieve intent {payment_intent_id}: {e}")
            return service_err(ErrorCodes.PAYMENT_PROVIDER_ERROR, "Could not verify payment")

        return self.apply_payment_outcome(payment_intent_id, intent.status, amount=intent.amount)

    def apply_payment_outcome(
        self, payment_intent_id: str, status: PaymentStatus, amount: Optional[int] = None
    ) -> ServiceResult[Dict]:
        """
        Move every order of an intent to its final state.

        Returns:
            ServiceResult with {payment_status, orders}
        """
        if status == PaymentStatus.SUCCEEDED:
            return self._mark_paid(payment_intent_id, amount)
        if status in (PaymentStatus.FAILED, PaymentStatus.CANCELED):
            return self._mark_failed(payment_intent_id)

        orders = list(Order.objects.filter(payment_intent_id=payment_intent_id))
        if all(order.payment_status == "paid" for order in orders) and orders:
            return service_ok({"payment_status": "paid", "orders": orders})
        return service_err(ErrorCodes.PAYMENT_NOT_SUCCEEDED, f"Payment is {status.value}")

    def _mark_paid(self, payment_intent_id: str, amount: Optional[int]) -> ServiceResult[Dict]:
        newly_paid = []
        with transaction.atomic():
            orders = list(
                Order.objects.select_for_update().filter(payment_intent_id=payment_intent_id).order_by("created_at")
            )
            if not orders:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "No orders for this payment")

            expected = sum((order.grand_total for order in orders), Decimal("0"))
            if amount is not None and to_minor_units(expected) != amount:
                self.logger.error(
                    f"Intent {payment_intent_id} amount {amount} does not match orders total {expected}"
                )
                return service_err(ErrorCodes.PAYMENT_MISMATCH, "Payment amount does not match the orders")

            for order in orders:
                if order.payment_status == "paid":
                    continue
                if order.product_id:
                    product = Product.objects.select_for_update().get(pk=order.product_id)
                    if product.stock_quantity < order.quantity:
                        self.logger.warning(
                            f"Stock for {product.id} went below demand while order {order.id} was paying"
                        )
                    product.stock_quantity = max(product.stock_quantity - order.quantity, 0)
                    product.save(update_fields=["stock_quantity", "updated_at"])

                order.status = "confirmed"
                order.payment_status = "paid"
                order.save(update_fields=["status", "payment_status", "updated_at"])
                newly_paid.append(order)

            if newly_paid:
                CartItem.objects.filter(cart__user_id=orders[0].buyer_id).delete()

        if newly_paid:
            record_payment("order", succeeded=True)
            event_bus = get_event_bus()
            for order in newly_paid:
                event_bus.publish_event(
                    OrderPlacedEvent(
                        order_id=str(order.id),
                        buyer_id=str(order.buyer_id),
                        seller_id=str(order.seller_id),
                        product_title=order.product.title if order.product_id else "",
                        total_price=order.total_price,
                    )
                )
            self.logger.info(f"Intent {payment_intent_id}: {len(newly_paid)} orders confirmed")

        return service_ok({"payment_status": "paid", "orders": orders})

    def _mark_failed(self, payment_intent_id: str) -> ServiceResult[Dict]:
        with transaction.atomic():
            orders = list(Order.objects.select_for_update().filter(payment_intent_id=payment_intent_id))
            if not orders:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "No orders for this payment")
            if any(order.payment_status == "paid" for order in orders):
                # A late failure event never undoes a captured payment
                return service_ok({"payment_status": "paid", "orders": orders})

            changed = [order for order in orders if order.payment_status != "failed"]
            for order in changed:
                order.status = "cancelled"
                order.payment_status = "failed"
                order.save(update_fields=["status", "payment_status", "updated_at"])

        if changed:
            record_payment("order", succeeded=False)
        return service_ok({"payment_status": "failed", "orders": orders})

    @BaseService.log_performance
    def handle_webhook(self, payload: bytes, signature: str) -> ServiceResult[Dict]:
        """
        Verify and apply a gateway webhook.

        ``payment_intent.succeeded`` / ``payment_intent.payment_failed`` are routed by the
        intent's ``type`` metadata: ``order`` here, ``credit_purchase`` to the credits app.
        Other event types are acknowledged and ignored.
        """
        try:
            event = self.payment_provider.verify_webhook(payload, signature)
        except PaymentException as e:
            return service_err(ErrorCodes.VALIDATION_ERROR, str(e))

        outcomes = {
            "payment_intent.succeeded": PaymentStatus.SUCCEEDED,
            "payment_intent.payment_failed": PaymentStatus.FAILED,
            "payment_intent.canceled": PaymentStatus.CANCELED,
        }
        status = outcomes.get(event.event_type)
        if status is None:
            return service_ok({"handled": False, "event_type": event.event_type})

        intent_id = event.data.get("id")
        purpose = (event.data.get("metadata") or {}).get("type")
        if purpose == "credit_purchase":
            from infrastructure.container import container

            result = container.credit_service().apply_purchase_outcome(intent_id, status)
        elif purpose == "order" or Order.objects.filter(payment_intent_id=intent_id).exists():
            result = self.apply_payment_outcome(intent_id, status, amount=event.data.get("amount"))
        else:
            self.logger.warning(f"Webhook for unknown intent {intent_id} ({event.event_type})")
            return service_ok({"handled": False, "event_type": event.event_type})

        if not result.ok:
            self.logger.error(f"Webhook {event.event_id} for {intent_id} not applied: {result.error_detail}")
            return service_ok({"handled": False, "event_type": event.event_type, "error": result.error})
        return service_ok({"handled": True, "event_type": event.event_type})
