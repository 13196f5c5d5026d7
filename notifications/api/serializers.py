from rest_framework import serializers

from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ("id", "type", "title", "message", "is_read", "action_url", "metadata", "created_at")
        read_only_fields = fields


class NotificationQuerySerializer(serializers.Serializer):
    filter = serializers.ChoiceField(choices=["all", "unread", "read"], required=False, default="all")
    type = serializers.ChoiceField(choices=Notification.TYPE_CHOICES, required=False)


class UnreadCountSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class BulkUpdateSerializer(serializers.Serializer):
    updated = serializers.IntegerField()
