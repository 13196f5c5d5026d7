import django_filters
from django.db.models import Q

from talent.models import ArtisteProfile, FreelancerProfile


class FreelancerFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    location = django_filters.CharFilter(method="filter_location")
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    availability = django_filters.ChoiceFilter(
        field_name="availability_status", choices=FreelancerProfile.AVAILABILITY_CHOICES
    )

    class Meta:
        model = FreelancerProfile
        fields = ["search", "location", "category", "availability"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(skills__icontains=value) | Q(user__full_name__icontains=value)
        )

    def filter_location(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(location__icontains=value) | Q(city__icontains=value))


class ArtisteFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    location = django_filters.CharFilter(method="filter_location")
    category = django_filters.ChoiceFilter(choices=ArtisteProfile.CATEGORY_CHOICES)
    available = django_filters.BooleanFilter(field_name="is_available")

    class Meta:
        model = ArtisteProfile
        fields = ["search", "location", "category", "available"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(stage_name__icontains=value) | Q(bio__icontains=value) | Q(specialties__icontains=value)
        )

    filter_location = FreelancerFilter.filter_location
