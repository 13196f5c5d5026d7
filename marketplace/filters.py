import django_filters
from django.db.models import Q

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """Query-string filters for the public product listing."""

    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    condition = django_filters.ChoiceFilter(choices=Product.CONDITION_CHOICES)
    seller = django_filters.UUIDFilter(field_name="seller_id")

    class Meta:
        model = Product
        fields = ["search", "category", "min_price", "max_price", "city", "condition", "seller"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(description__icontains=value) | Q(category__icontains=value)
        )
