from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from notifications.api.serializers import (
    BulkUpdateSerializer,
    NotificationQuerySerializer,
    NotificationSerializer,
    UnreadCountSerializer,
)
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer


class NotificationViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.notification_service()

    @extend_schema(
        operation_id="notifications_list",
        parameters=[
            OpenApiParameter("filter", str, enum=["all", "unread", "read"]),
            OpenApiParameter("type", str),
        ],
        responses={200: NotificationSerializer(many=True), 400: ErrorResponseSerializer},
        tags=["Notifications"],
    )
    def list(self, request):
        query = NotificationQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = self.get_service().list_notifications(
            request.user,
            read_filter=query.validated_data["filter"],
            type=query.validated_data.get("type"),
        )
        if not result.ok:
            return error_response(result)
        return Response(NotificationSerializer(result.value, many=True).data)

    @extend_schema(operation_id="notifications_destroy", responses={204: None, 404: ErrorResponseSerializer}, tags=["Notifications"])
    def destroy(self, request, pk=None):
        result = self.get_service().delete(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(operation_id="notifications_unread_count", responses={200: UnreadCountSerializer}, tags=["Notifications"])
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread_count": self.get_service().unread_count(request.user).value})

    @extend_schema(
        operation_id="notifications_mark_read",
        request=None,
        responses={200: NotificationSerializer, 404: ErrorResponseSerializer},
        tags=["Notifications"],
    )
    @action(detail=True, methods=["post"], url_path="read")
    def mark_read(self, request, pk=None):
        result = self.get_service().mark_read(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(NotificationSerializer(result.value).data)

    @extend_schema(operation_id="notifications_mark_all_read", request=None, responses={200: BulkUpdateSerializer}, tags=["Notifications"])
    @action(detail=False, methods=["post"], url_path="mark-all-read")
    def mark_all_read(self, request):
        return Response({"updated": self.get_service().mark_all_read(request.user).value})

    @extend_schema(operation_id="notifications_clear_read", request=None, responses={200: BulkUpdateSerializer}, tags=["Notifications"])
    @action(detail=False, methods=["delete"], url_path="clear-read")
    def clear_read(self, request):
        return Response({"updated": self.get_service().clear_read(request.user).value})
