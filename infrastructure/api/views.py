from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.api.serializers import (
    CitySerializer,
    LocationSerializer,
    ReverseGeocodeQuerySerializer,
    UploadResponseSerializer,
    UploadSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.location import CANADIAN_CITIES


class LocationSearchView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="location_search",
        summary="Search Canadian places",
        parameters=[OpenApiParameter("q", str, required=True)],
        responses={200: LocationSerializer(many=True)},
        tags=["Location"],
    )
    def get(self, request):
        results = container.geocoder().search_location(request.query_params.get("q", ""))
        return Response(results)


class ReverseGeocodeView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="location_reverse",
        summary="Resolve coordinates to a place",
        parameters=[OpenApiParameter("lat", float, required=True), OpenApiParameter("lon", float, required=True)],
        responses={200: LocationSerializer},
        tags=["Location"],
    )
    def get(self, request):
        query = ReverseGeocodeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        location = container.geocoder().reverse_geocode(query.validated_data["lat"], query.validated_data["lon"])
        if location is None:
            return Response({"detail": "Could not resolve location"}, status=status.HTTP_404_NOT_FOUND)
        return Response(location)


class CityListView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="location_cities",
        summary="Major Canadian cities",
        responses={200: CitySerializer(many=True)},
        tags=["Location"],
    )
    def get(self, request):
        return Response(CANADIAN_CITIES)


class UploadView(APIView):
    """Upload listing or profile images to object storage."""

    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="media_upload",
        summary="Upload images",
        request={"multipart/form-data": UploadSerializer},
        responses={201: UploadResponseSerializer},
        tags=["Media"],
    )
    def post(self, request):
        serializer = UploadSerializer(
            data={"folder": request.data.get("folder"), "files": request.FILES.getlist("files")}
        )
        serializer.is_valid(raise_exception=True)

        result = container.media_upload_service().upload_images(
            request.user, serializer.validated_data["folder"], serializer.validated_data["files"]
        )
        if not result.ok:
            return error_response(result)
        return Response({"urls": result.value}, status=status.HTTP_201_CREATED)
