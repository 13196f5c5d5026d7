from decimal import Decimal
from unittest.mock import Mock

import pytest

from marketplace.domain.services.pricing_service import PricingService
from marketplace.models import Product


@pytest.mark.unit
class TestPricingServiceUnit:
    def setup_method(self):
        self.service = PricingService()

        self.product = Mock(spec=Product)
        self.product.price = Decimal("100.00")
        self.product.original_price = None

    def test_empty_cart_costs_nothing(self):
        result = self.service.calculate_cart_total([])
        assert result.ok
        assert result.value == {
            "subtotal": Decimal("0"),
            "shipping": Decimal("0"),
            "total": Decimal("0"),
            "item_count": 0,
        }

    def test_flat_shipping_below_threshold(self):
        result = self.service.calculate_cart_total([{"product": self.product, "quantity": 3}])
        assert result.value["subtotal"] == Decimal("300.00")
        assert result.value["shipping"] == Decimal("2500")
        assert result.value["total"] == Decimal("2800.00")
        assert result.value["item_count"] == 3

    def test_shipping_still_charged_at_exact_threshold(self):
        self.product.price = Decimal("50000")
        result = self.service.calculate_cart_total([{"product": self.product, "quantity": 1}])
        assert result.value["shipping"] == Decimal("2500")

    def test_free_shipping_above_threshold(self):
        self.product.price = Decimal("25000.01")
        result = self.service.calculate_cart_total([{"product": self.product, "quantity": 2}])
        assert result.value["shipping"] == Decimal("0")
        assert result.value["total"] == Decimal("50000.02")

    def test_discount_percentage(self):
        self.product.original_price = Decimal("200.00")
        result = self.service.calculate_discount_percentage(self.product)
        assert result.ok
        assert result.value == Decimal("50.00")

    def test_no_discount_without_higher_original_price(self):
        self.product.original_price = Decimal("80.00")
        assert self.service.calculate_discount_percentage(self.product).value == Decimal("0")
