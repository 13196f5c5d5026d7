from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from talent.api.serializers import (
    ArtisteProfileSerializer,
    ArtisteProfileWriteSerializer,
    FreelanceHireSerializer,
    FreelancerProfileSerializer,
    FreelancerProfileWriteSerializer,
    HireRequestSerializer,
    HireStatusUpdateSerializer,
)
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer, PaginatedResponseSerializer, serialize_page

GEO_PARAMETERS = [
    OpenApiParameter("lat", float),
    OpenApiParameter("lon", float),
    OpenApiParameter("radius", float),
    OpenApiParameter("page", int),
    OpenApiParameter("page_size", int),
]


class ProfileViewSetMixin:
    """Public directory plus a ``me`` endpoint for the caller's own profile."""

    read_serializer_class = None
    write_serializer_class = None

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def _me(self, request, service):
        if request.method == "GET":
            result = service.get_my_profile(request.user)
        elif request.method == "DELETE":
            result = service.delete_my_profile(request.user)
            if result.ok:
                return Response(status=status.HTTP_204_NO_CONTENT)
        else:
            serializer = self.write_serializer_class(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            result = service.upsert_my_profile(request.user, serializer.validated_data)

        if not result.ok:
            return error_response(result)
        return Response(self.read_serializer_class(result.value).data)


class FreelancerViewSet(ProfileViewSetMixin, viewsets.ViewSet):
    read_serializer_class = FreelancerProfileSerializer
    write_serializer_class = FreelancerProfileWriteSerializer

    def get_service(self):
        return container.freelancer_service()

    @extend_schema(
        operation_id="freelancers_list",
        summary="Browse freelancers",
        parameters=[
            OpenApiParameter("search", str, description="Title, skills or name"),
            OpenApiParameter("location", str),
            OpenApiParameter("category", str),
            OpenApiParameter("availability", str, enum=["available", "busy", "unavailable"]),
            OpenApiParameter("sort_by", str, enum=["rating", "rate_low", "rate_high", "newest", "distance"]),
            *GEO_PARAMETERS,
        ],
        responses={200: PaginatedResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Talent - Freelancers"],
    )
    def list(self, request):
        result = self.get_service().list_freelancers(request.query_params)
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, FreelancerProfileSerializer))

    @extend_schema(
        operation_id="freelancers_retrieve",
        responses={200: FreelancerProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Talent - Freelancers"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_freelancer(pk)
        if not result.ok:
            return error_response(result)
        return Response(FreelancerProfileSerializer(result.value).data)

    @extend_schema(
        operation_id="freelancers_me",
        summary="My freelancer profile (PUT/PATCH create or update)",
        request=FreelancerProfileWriteSerializer,
        responses={200: FreelancerProfileSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Talent - Freelancers"],
    )
    @action(detail=False, methods=["get", "put", "patch", "delete"])
    def me(self, request):
        return self._me(request, self.get_service())

    @extend_schema(
        operation_id="freelancers_hire",
        summary="Send a hire request",
        request=HireRequestSerializer,
        responses={201: FreelanceHireSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Talent - Hires"],
    )
    @action(detail=True, methods=["post"])
    def hire(self, request, pk=None):
        serializer = HireRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.hire_service().hire_freelancer(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(FreelanceHireSerializer(result.value).data, status=status.HTTP_201_CREATED)


class ArtisteViewSet(ProfileViewSetMixin, viewsets.ViewSet):
    read_serializer_class = ArtisteProfileSerializer
    write_serializer_class = ArtisteProfileWriteSerializer

    def get_service(self):
        return container.artiste_service()

    @extend_schema(
        operation_id="artistes_list",
        summary="Browse artistes (boosted first)",
        parameters=[
            OpenApiParameter("search", str, description="Stage name, bio or specialties"),
            OpenApiParameter("location", str),
            OpenApiParameter("category", str),
            OpenApiParameter("available", bool),
            OpenApiParameter("sort_by", str, enum=["boosted", "rating", "newest", "distance"]),
            *GEO_PARAMETERS,
        ],
        responses={200: PaginatedResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Talent - Artistes"],
    )
    def list(self, request):
        result = self.get_service().list_artistes(request.query_params)
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, ArtisteProfileSerializer))

    @extend_schema(
        operation_id="artistes_retrieve",
        responses={200: ArtisteProfileSerializer, 404: ErrorResponseSerializer},
        tags=["Talent - Artistes"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_artiste(pk)
        if not result.ok:
            return error_response(result)
        return Response(ArtisteProfileSerializer(result.value).data)

    @extend_schema(
        operation_id="artistes_me",
        summary="My artiste profile (PUT/PATCH create or update)",
        request=ArtisteProfileWriteSerializer,
        responses={200: ArtisteProfileSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Talent - Artistes"],
    )
    @action(detail=False, methods=["get", "put", "patch", "delete"])
    def me(self, request):
        return self._me(request, self.get_service())


class HireViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="hires_list",
        summary="Hires I requested (client) or received (freelancer)",
        parameters=[OpenApiParameter("role", str, enum=["client", "freelancer"])],
        responses={200: FreelanceHireSerializer(many=True), 400: ErrorResponseSerializer},
        tags=["Talent - Hires"],
    )
    def list(self, request):
        result = container.hire_service().list_hires(request.user, request.query_params.get("role", "client"))
        if not result.ok:
            return error_response(result)
        return Response(FreelanceHireSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="hires_update_status",
        request=HireStatusUpdateSerializer,
        responses={200: FreelanceHireSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
        tags=["Talent - Hires"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = HireStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.hire_service().update_hire_status(request.user, pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(FreelanceHireSerializer(result.value).data)
