"""
CartService - Shopping Cart Operations

Server-side cart, one per user. Validates product availability and stock on
every write and computes totals through PricingService.
"""

from typing import Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from marketplace.models import Cart, CartItem, Product
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .pricing_service import PricingService


class CartService(BaseService):
    """
    Responsibilities:
    - Get user's cart with totals
    - Add items (quantities merge), update, remove, clear

    Dependencies:
    - PricingService: Calculate cart totals
    """

    def __init__(self, pricing_service: Optional[PricingService] = None):
        super().__init__()
        self.pricing_service = pricing_service or PricingService()

    def _cart_for(self, user) -> Cart:
        cart, _ = Cart.objects.get_or_create(user=user)
        return cart

    @BaseService.log_performance
    def get_cart(self, user) -> ServiceResult[Dict]:
        """
        Returns:
            ServiceResult with {id, items: [{product, quantity, line_total}], subtotal, shipping, total, item_count}
        """
        cart = self._cart_for(user)
        cart_items = list(cart.items.select_related("product", "product__seller"))

        totals = self.pricing_service.calculate_cart_total(
            [{"product": item.product, "quantity": item.quantity} for item in cart_items]
        ).value

        return service_ok(
            {
                "id": cart.id,
                "items": [
                    {"product": item.product, "quantity": item.quantity, "line_total": item.line_total}
                    for item in cart_items
                ],
                **totals,
            }
        )

    def validate_line(self, user, product: Product, quantity: int) -> Optional[ServiceResult]:
        if quantity < 1:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")
        if not product.is_active:
            return service_err(ErrorCodes.PRODUCT_INACTIVE, "Product is no longer available")
        if product.seller_id == user.pk:
            return service_err(ErrorCodes.CANNOT_BUY_OWN_PRODUCT, "You cannot buy your own product")
        if quantity > product.stock_quantity:
            return service_err(
                ErrorCodes.INSUFFICIENT_STOCK,
                f"Insufficient stock for {product.title}: {product.stock_quantity} available",
            )
        return None

    def _load_product(self, product_id) -> ServiceResult[Product]:
        try:
            return service_ok(Product.objects.get(pk=product_id))
        except (Product.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

    @BaseService.log_performance
    @transaction.atomic
    def add_item(self, user, product_id, quantity: int = 1) -> ServiceResult[Dict]:
        if quantity < 1:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        product_result = self._load_product(product_id)
        if not product_result.ok:
            return product_result
        product = product_result.value

        cart = self._cart_for(user)
        item = CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
        new_quantity = (item.quantity if item else 0) + quantity

        error = self.validate_line(user, product, new_quantity)
        if error:
            return error

        if item:
            item.quantity = new_quantity
            item.save(update_fields=["quantity"])
        else:
            CartItem.objects.create(cart=cart, product=product, quantity=new_quantity)

        self.logger.info(f"User {user.id} added {quantity} x {product.id} to cart")
        return self.get_cart(user)

    @BaseService.log_performance
    @transaction.atomic
    def update_item(self, user, product_id, quantity: int) -> ServiceResult[Dict]:
        """Set an item's quantity. Zero removes the item."""
        if quantity == 0:
            return self.remove_item(user, product_id)

        product_result = self._load_product(product_id)
        if not product_result.ok:
            return product_result

        cart = self._cart_for(user)
        item = (
            CartItem.objects.select_for_update()
            .select_related("product")
            .filter(cart=cart, product=product_result.value)
            .first()
        )
        if item is None:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Item not in cart")

        error = self.validate_line(user, item.product, quantity)
        if error:
            return error

        item.quantity = quantity
        item.save(update_fields=["quantity"])
        return self.get_cart(user)

    @BaseService.log_performance
    def remove_item(self, user, product_id) -> ServiceResult[Dict]:
        cart = self._cart_for(user)
        try:
            deleted, _ = CartItem.objects.filter(cart=cart, product_id=product_id).delete()
        except ValidationError:
            deleted = 0
        if not deleted:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Item not in cart")
        return self.get_cart(user)

    @BaseService.log_performance
    def clear_cart(self, user) -> ServiceResult[Dict]:
        CartItem.objects.filter(cart__user=user).delete()
        return self.get_cart(user)
