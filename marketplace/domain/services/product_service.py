"""
ProductService - catalog listing and seller-side product management.
"""

from typing import Any, Dict, List

from django.core.exceptions import ValidationError
from django.db.models import Count

from marketplace.filters import ProductFilter
from marketplace.models import Product
from utils.listing import BOOSTED_ORDERING, build_listing
from utils.rbac import can_manage
from utils.serializers import normalize_string_list
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

PRODUCT_SORT_ORDERS = {
    "newest": ("-created_at",),
    "price_low": ("price", "-created_at"),
    "price_high": ("-price", "-created_at"),
    "boosted": BOOSTED_ORDERING,
}

# Managed by the credits app or by admins only
PROTECTED_FIELDS = {"id", "seller", "seller_id", "is_boosted", "boost_score", "boost_expires_at", "featured"}


class ProductService(BaseService):
    @BaseService.log_performance
    def list_products(self, params) -> ServiceResult[Dict]:
        queryset = Product.objects.filter(is_active=True).select_related("seller")
        queryset = ProductFilter(params, queryset=queryset).qs
        return build_listing(queryset, params, PRODUCT_SORT_ORDERS, default_sort="newest")

    def get_product(self, product_id, user=None) -> ServiceResult[Product]:
        """Inactive products are visible to their seller and admins only."""
        try:
            product = Product.objects.select_related("seller").get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        if not product.is_active and not (user and user.is_authenticated and can_manage(user, product.seller_id)):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        return service_ok(product)

    @BaseService.log_performance
    def create_product(self, seller, data: Dict[str, Any]) -> ServiceResult[Product]:
        fields = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        fields["tags"] = normalize_string_list(fields.get("tags"))
        fields["is_active"] = True
        fields["featured"] = False

        product = Product.objects.create(seller=seller, **fields)
        self.logger.info(f"Seller {seller.id} created product {product.id}")
        return service_ok(product)

    @BaseService.log_performance
    def update_product(self, user, product_id, data: Dict[str, Any]) -> ServiceResult[Product]:
        result = self._get_managed(user, product_id)
        if not result.ok:
            return result
        product = result.value

        updates = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        if "tags" in updates:
            updates["tags"] = normalize_string_list(updates["tags"])
        for key, value in updates.items():
            setattr(product, key, value)
        product.save()
        return service_ok(product)

    @BaseService.log_performance
    def delete_product(self, user, product_id) -> ServiceResult[None]:
        result = self._get_managed(user, product_id)
        if not result.ok:
            return result
        result.value.delete()
        self.logger.info(f"User {user.id} deleted product {product_id}")
        return service_ok(None)

    def my_products(self, user) -> ServiceResult[List[Product]]:
        return service_ok(list(Product.objects.filter(seller=user).order_by("-created_at")))

    def categories(self) -> ServiceResult[List[Dict]]:
        rows = (
            Product.objects.filter(is_active=True)
            .values("category")
            .annotate(count=Count("id"))
            .order_by("category")
        )
        return service_ok([{"name": row["category"], "count": row["count"]} for row in rows])

    def _get_managed(self, user, product_id) -> ServiceResult[Product]:
        try:
            product = Product.objects.get(pk=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        if not can_manage(user, product.seller_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the seller can modify this product")
        return service_ok(product)
