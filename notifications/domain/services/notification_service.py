"""
NotificationService - in-app notifications.

``notify`` persists first and then pushes ``notification.created`` to the
user's ``notifications_<id>`` group. The push is best-effort.
"""

from typing import Dict, List, Optional

from django.core.exceptions import ValidationError

from infrastructure.observability.metrics import notifications_sent_total
from notifications.models import Notification
from utils.realtime import notifications_group, push_to_group
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

NOTIFICATION_TYPES = {choice[0] for choice in Notification.TYPE_CHOICES}
READ_FILTERS = ("all", "unread", "read")


def notification_payload(notification: Notification) -> Dict:
    return {
        "id": str(notification.id),
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "action_url": notification.action_url,
        "metadata": notification.metadata,
        "created_at": notification.created_at.isoformat(),
    }


class NotificationService(BaseService):
    def notify(
        self,
        user_id,
        type: str,
        title: str,
        message: str,
        action_url: str = "",
        metadata: Optional[Dict] = None,
    ) -> ServiceResult[Notification]:
        if type not in NOTIFICATION_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown notification type: {type}")

        notification = Notification.objects.create(
            user_id=user_id,
            type=type,
            title=title[:200],
            message=message,
            action_url=action_url or "",
            metadata=metadata or {},
        )
        notifications_sent_total.labels(type=type).inc()
        push_to_group(notifications_group(user_id), "notification.created", notification_payload(notification))
        return service_ok(notification)

    def list_notifications(self, user, read_filter: str = "all", type: Optional[str] = None) -> ServiceResult[List]:
        if read_filter not in READ_FILTERS:
            return service_err(ErrorCodes.INVALID_INPUT, f"filter must be one of: {', '.join(READ_FILTERS)}")
        if type and type not in NOTIFICATION_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown notification type: {type}")

        notifications = Notification.objects.filter(user=user)
        if read_filter == "unread":
            notifications = notifications.filter(is_read=False)
        elif read_filter == "read":
            notifications = notifications.filter(is_read=True)
        if type:
            notifications = notifications.filter(type=type)
        return service_ok(list(notifications))

    def unread_count(self, user) -> ServiceResult[int]:
        return service_ok(Notification.objects.filter(user=user, is_read=False).count())

    def mark_read(self, user, notification_id) -> ServiceResult[Notification]:
        try:
            notification = Notification.objects.get(pk=notification_id, user=user)
        except (Notification.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.NOTIFICATION_NOT_FOUND, "Notification not found")
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return service_ok(notification)

    def mark_all_read(self, user) -> ServiceResult[int]:
        return service_ok(Notification.objects.filter(user=user, is_read=False).update(is_read=True))

    def delete(self, user, notification_id) -> ServiceResult[None]:
        try:
            deleted, _ = Notification.objects.filter(pk=notification_id, user=user).delete()
        except (ValidationError, ValueError):
            deleted = 0
        if not deleted:
            return service_err(ErrorCodes.NOTIFICATION_NOT_FOUND, "Notification not found")
        return service_ok(None)

    def clear_read(self, user) -> ServiceResult[int]:
        deleted, _ = Notification.objects.filter(user=user, is_read=True).delete()
        return service_ok(deleted)
