"""Serializer building blocks shared by every app."""

from rest_framework import serializers

from .location import format_distance


class StringListField(serializers.ListField):
    """List of strings that also accepts a comma-separated string ("jazz, soul")."""

    child = serializers.CharField(max_length=100)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [part.strip() for part in data.split(",")]
        return [value for value in super().to_internal_value(data) if value]


class DistanceFieldsMixin(serializers.Serializer):
    """Exposes the ``distance`` annotation set by radius search, when present."""

    distance = serializers.SerializerMethodField()
    distance_display = serializers.SerializerMethodField()

    def get_distance(self, obj):
        distance = getattr(obj, "distance", None)
        return round(distance, 2) if distance is not None else None

    def get_distance_display(self, obj):
        distance = getattr(obj, "distance", None)
        return format_distance(distance) if distance is not None else None


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    code = serializers.CharField(help_text="Error code identifier", required=False)


class PaginatedResponseSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    num_pages = serializers.IntegerField()
    has_next = serializers.BooleanField()
    has_previous = serializers.BooleanField()
    results = serializers.ListField(child=serializers.DictField())


def serialize_page(page: dict, serializer_class, context=None) -> dict:
    """Replace a paginate() envelope's model instances with serialized data."""
    return {**page, "results": serializer_class(page["results"], many=True, context=context or {}).data}


def normalize_string_list(values) -> list:
    """Accept a list or a comma-separated string; drop blanks and duplicates, keep order."""
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    seen = []
    for value in values:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen
