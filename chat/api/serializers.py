from rest_framework import serializers

from authentication.api.serializers import UserSummarySerializer
from chat.models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    receiver = UserSummarySerializer(read_only=True)

    class Meta:
        model = Message
        fields = (
            "id",
            "thread_id",
            "sender",
            "receiver",
            "subject",
            "content",
            "attachments",
            "is_read",
            "created_at",
        )
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    receiver_id = serializers.UUIDField()
    content = serializers.CharField(max_length=5000)
    subject = serializers.CharField(max_length=200, required=False, allow_blank=True)
    attachments = serializers.ListField(child=serializers.URLField(max_length=500), required=False, max_length=10)


class ConversationSerializer(serializers.Serializer):
    thread_id = serializers.UUIDField()
    user = UserSummarySerializer()
    last_message = MessageSerializer()
    last_message_at = serializers.DateTimeField()
    unread_count = serializers.IntegerField()


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()
