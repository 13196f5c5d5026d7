import django_filters
from django.db.models import Q

from jobs.models import Job


class JobFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    job_type = django_filters.ChoiceFilter(choices=Job.JOB_TYPE_CHOICES)
    experience_level = django_filters.ChoiceFilter(choices=Job.EXPERIENCE_LEVEL_CHOICES)
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    # Salary ranges overlap the requested bound
    min_salary = django_filters.NumberFilter(field_name="salary_max", lookup_expr="gte")
    max_salary = django_filters.NumberFilter(field_name="salary_min", lookup_expr="lte")
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")

    class Meta:
        model = Job
        fields = ["search", "job_type", "experience_level", "category", "min_salary", "max_salary", "city"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(company__icontains=value) | Q(description__icontains=value)
        )
