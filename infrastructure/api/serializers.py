from rest_framework import serializers

from infrastructure.storage.media import ALLOWED_FOLDERS


class LocationSerializer(serializers.Serializer):
    location_name = serializers.CharField()
    city = serializers.CharField(allow_null=True)
    state = serializers.CharField(allow_null=True)
    country = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()


class ReverseGeocodeQuerySerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lon = serializers.FloatField(min_value=-180, max_value=180)


class CitySerializer(serializers.Serializer):
    name = serializers.CharField()
    state = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()


class UploadSerializer(serializers.Serializer):
    folder = serializers.ChoiceField(choices=ALLOWED_FOLDERS)
    files = serializers.ListField(child=serializers.FileField(), allow_empty=False, max_length=10)


class UploadResponseSerializer(serializers.Serializer):
    urls = serializers.ListField(child=serializers.URLField())
