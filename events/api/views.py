from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from events.api.serializers import (
    EventApplicationSerializer,
    EventApplicationStatusSerializer,
    EventApplyRequestSerializer,
    EventRegistrationSerializer,
    EventSerializer,
    EventWriteSerializer,
    RegisterRequestSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer, PaginatedResponseSerializer, serialize_page


class EventViewSet(viewsets.ViewSet):
    """Events: discovery, organizer management, registrations and artiste applications."""

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_service(self):
        return container.event_service()

    @extend_schema(
        operation_id="events_list",
        summary="List active events",
        parameters=[
            OpenApiParameter("search", str, description="Title, description, venue or location"),
            OpenApiParameter("category", str),
            OpenApiParameter("city", str),
            OpenApiParameter("upcoming", bool, description="Only events starting today or later"),
            OpenApiParameter("lat", float),
            OpenApiParameter("lon", float),
            OpenApiParameter("radius", float),
            OpenApiParameter("sort_by", str, enum=["date", "newest", "price_low", "price_high", "boosted", "distance"]),
            OpenApiParameter("page", int),
            OpenApiParameter("page_size", int),
        ],
        responses={200: PaginatedResponseSerializer, 400: ErrorResponseSerializer},
        tags=["Events"],
    )
    def list(self, request):
        result = self.get_service().list_events(request.query_params)
        if not result.ok:
            return error_response(result)
        return Response(serialize_page(result.value, EventSerializer))

    @extend_schema(operation_id="events_retrieve", responses={200: EventSerializer, 404: ErrorResponseSerializer}, tags=["Events"])
    def retrieve(self, request, pk=None):
        result = self.get_service().get_event(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(EventSerializer(result.value).data)

    @extend_schema(
        operation_id="events_create",
        request=EventWriteSerializer,
        responses={201: EventSerializer, 400: ErrorResponseSerializer},
        tags=["Events"],
    )
    def create(self, request):
        serializer = EventWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().create_event(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(EventSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="events_update",
        summary="Update an event (organizer only)",
        request=EventWriteSerializer,
        responses={200: EventSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Events"],
    )
    def partial_update(self, request, pk=None):
        serializer = EventWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().update_event(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(EventSerializer(result.value).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    @extend_schema(
        operation_id="events_delete",
        responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Events"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_event(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(operation_id="events_mine", responses={200: EventSerializer(many=True)}, tags=["Events"])
    @action(detail=False, methods=["get"])
    def mine(self, request):
        return Response(EventSerializer(self.get_service().my_events(request.user).value, many=True).data)

    @extend_schema(
        operation_id="events_register",
        summary="Register for an event",
        description="""
        Free events are confirmed immediately. Paid events hold the seats with
        status pending_payment until payment is settled with the organizer.
        """,
        request=RegisterRequestSerializer,
        responses={
            201: EventRegistrationSerializer,
            404: ErrorResponseSerializer,
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Already registered or sold out"),
        },
        tags=["Events - Registrations"],
    )
    @action(detail=True, methods=["post"])
    def register(self, request, pk=None):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.registration_service().register(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(EventRegistrationSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="events_registrations",
        summary="Registrations for an event (organizer only)",
        responses={200: EventRegistrationSerializer(many=True), 403: ErrorResponseSerializer},
        tags=["Events - Registrations"],
    )
    @action(detail=True, methods=["get"])
    def registrations(self, request, pk=None):
        result = container.registration_service().list_registrations(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(EventRegistrationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="events_apply",
        summary="Apply to perform or work at an event",
        request=EventApplyRequestSerializer,
        responses={201: EventApplicationSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        tags=["Events - Applications"],
    )
    @action(detail=True, methods=["post"])
    def apply(self, request, pk=None):
        serializer = EventApplyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.event_application_service().apply_to_event(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(EventApplicationSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="events_applications",
        summary="Artiste applications for an event (organizer only)",
        responses={200: EventApplicationSerializer(many=True), 403: ErrorResponseSerializer},
        tags=["Events - Applications"],
    )
    @action(detail=True, methods=["get"])
    def applications(self, request, pk=None):
        result = container.event_application_service().list_event_applications(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(EventApplicationSerializer(result.value, many=True).data)


class RegistrationViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="event_registrations_mine",
        responses={200: EventRegistrationSerializer(many=True)},
        tags=["Events - Registrations"],
    )
    def list(self, request):
        result = container.registration_service().my_registrations(request.user)
        return Response(EventRegistrationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="event_registrations_cancel",
        request=None,
        responses={200: EventRegistrationSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Events - Registrations"],
    )
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        result = container.registration_service().cancel_registration(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(EventRegistrationSerializer(result.value).data)

    @extend_schema(
        operation_id="event_registrations_check_in",
        summary="Check an attendee in (organizer only)",
        request=None,
        responses={200: EventRegistrationSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Events - Registrations"],
    )
    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        result = container.registration_service().check_in(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(EventRegistrationSerializer(result.value).data)


class EventApplicationViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="event_applications_mine",
        responses={200: EventApplicationSerializer(many=True)},
        tags=["Events - Applications"],
    )
    def list(self, request):
        result = container.event_application_service().my_event_applications(request.user)
        return Response(EventApplicationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="event_applications_update_status",
        request=EventApplicationStatusSerializer,
        responses={200: EventApplicationSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Events - Applications"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = EventApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = container.event_application_service().update_event_application_status(
            request.user, pk, serializer.validated_data["status"]
        )
        if not result.ok:
            return error_response(result)
        return Response(EventApplicationSerializer(result.value).data)
