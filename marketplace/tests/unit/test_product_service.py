from decimal import Decimal

import pytest

from authentication.tests.factories import AdminFactory, SellerFactory, UserFactory
from marketplace.domain.services.product_service import ProductService
from marketplace.models import Product
from marketplace.tests.factories import ProductFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestProductService:
    def setup_method(self):
        self.service = ProductService()

    def test_create_forces_active_and_not_featured(self):
        seller = SellerFactory()
        result = self.service.create_product(
            seller,
            {
                "title": "Desk lamp",
                "price": Decimal("45.00"),
                "category": "Home",
                "is_active": False,
                "featured": True,
                "is_boosted": True,
                "tags": "lamp, desk",
            },
        )
        assert result.ok
        product = Product.objects.get(pk=result.value.pk)
        assert product.is_active is True
        assert product.featured is False
        assert product.is_boosted is False
        assert product.tags == ["lamp", "desk"]
        assert product.seller_id == seller.id

    def test_only_seller_or_admin_can_update(self):
        product = ProductFactory()
        stranger = UserFactory()

        denied = self.service.update_product(stranger, product.id, {"title": "Hijacked"})
        assert not denied.ok
        assert denied.error == ErrorCodes.PERMISSION_DENIED

        by_admin = self.service.update_product(AdminFactory(), product.id, {"title": "Moderated"})
        assert by_admin.ok
        product.refresh_from_db()
        assert product.title == "Moderated"

    def test_update_ignores_boost_fields(self):
        product = ProductFactory()
        result = self.service.update_product(product.seller, product.id, {"boost_score": 999, "price": Decimal("5")})
        assert result.ok
        product.refresh_from_db()
        assert product.boost_score == 0
        assert product.price == Decimal("5")

    def test_inactive_product_hidden_from_strangers(self):
        product = ProductFactory(is_active=False)
        assert self.service.get_product(product.id, UserFactory()).error == ErrorCodes.PRODUCT_NOT_FOUND
        assert self.service.get_product(product.id, product.seller).ok

    def test_get_product_with_malformed_id(self):
        result = self.service.get_product("not-a-uuid")
        assert result.error == ErrorCodes.PRODUCT_NOT_FOUND

    def test_my_products_includes_inactive(self):
        seller = SellerFactory()
        ProductFactory(seller=seller)
        ProductFactory(seller=seller, is_active=False)
        ProductFactory()
        assert len(self.service.my_products(seller).value) == 2

    def test_categories_count_active_only(self):
        ProductFactory(category="Books")
        ProductFactory(category="Books")
        ProductFactory(category="Art")
        ProductFactory(category="Art", is_active=False)
        assert self.service.categories().value == [{"name": "Art", "count": 1}, {"name": "Books", "count": 2}]

    def test_sort_by_distance_requires_coordinates(self):
        result = self.service.list_products({"sort_by": "distance"})
        assert result.error == ErrorCodes.INVALID_INPUT

    def test_unknown_sort_rejected(self):
        assert self.service.list_products({"sort_by": "cheapest"}).error == ErrorCodes.INVALID_INPUT
