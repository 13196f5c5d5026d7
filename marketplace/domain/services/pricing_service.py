"""
PricingService - cart and checkout totals.

Pure calculations, no database access. Amounts are Decimals in major units.
"""

from decimal import Decimal
from typing import Dict, Iterable

from utils.service_base import BaseService, ServiceResult, service_ok

FREE_SHIPPING_THRESHOLD = Decimal("50000")
FLAT_SHIPPING_FEE = Decimal("2500")


class PricingService(BaseService):
    def calculate_shipping(self, subtotal: Decimal) -> Decimal:
        """Flat fee, waived once the subtotal is strictly above the threshold."""
        return Decimal("0") if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE

    def calculate_cart_total(self, items: Iterable[Dict]) -> ServiceResult[Dict]:
        """
        Totals for a list of {"product": Product, "quantity": int}.

        Returns:
            ServiceResult with {subtotal, shipping, total, item_count}.
            An empty cart costs nothing, shipping included.
        """
        subtotal = Decimal("0")
        item_count = 0
        for item in items:
            subtotal += item["product"].price * item["quantity"]
            item_count += item["quantity"]

        shipping = self.calculate_shipping(subtotal) if item_count else Decimal("0")
        return service_ok(
            {
                "subtotal": subtotal,
                "shipping": shipping,
                "total": subtotal + shipping,
                "item_count": item_count,
            }
        )

    def calculate_discount_percentage(self, product) -> ServiceResult[Decimal]:
        if not product.original_price or product.original_price <= product.price:
            return service_ok(Decimal("0"))
        discount = (product.original_price - product.price) / product.original_price * 100
        return service_ok(discount.quantize(Decimal("0.01")))
