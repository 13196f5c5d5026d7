from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from chat.api.serializers import (
    ConversationSerializer,
    MessageSerializer,
    SendMessageSerializer,
    UnreadCountSerializer,
)
from infrastructure.container import container
from utils.http import error_response
from utils.serializers import ErrorResponseSerializer


class MessageViewSet(viewsets.ViewSet):
    """
    Direct messages.

    Detail routes are keyed by the counterpart's user id, not a message id.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.message_service()

    @extend_schema(
        operation_id="messages_conversations",
        summary="Conversations, most recent first",
        responses={200: ConversationSerializer(many=True)},
        tags=["Messages"],
    )
    def list(self, request):
        result = self.get_service().list_conversations(request.user)
        return Response(ConversationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="messages_send",
        request=SendMessageSerializer,
        responses={201: MessageSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Messages"],
    )
    def create(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = self.get_service().send_message(
            request.user,
            data["receiver_id"],
            data["content"],
            subject=data.get("subject", ""),
            attachments=data.get("attachments"),
        )
        if not result.ok:
            return error_response(result)
        return Response(MessageSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="messages_conversation",
        summary="Messages with one user (marks incoming ones read)",
        responses={200: MessageSerializer(many=True), 404: ErrorResponseSerializer},
        tags=["Messages"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_conversation(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(MessageSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="messages_clear",
        summary="Delete every message with one user",
        responses={204: None, 404: ErrorResponseSerializer},
        tags=["Messages"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().clear_conversation(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="messages_export",
        summary="Download a conversation as plain text",
        responses={200: OpenApiResponse(response=OpenApiTypes.STR), 404: ErrorResponseSerializer},
        tags=["Messages"],
    )
    @action(detail=True, methods=["get"])
    def export(self, request, pk=None):
        result = self.get_service().export_conversation(request.user, pk)
        if not result.ok:
            return error_response(result)
        response = HttpResponse(result.value, content_type="text/plain; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="conversation-{pk}.txt"'
        return response

    @extend_schema(operation_id="messages_unread_count", responses={200: UnreadCountSerializer}, tags=["Messages"])
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread_count": self.get_service().unread_count(request.user).value})
