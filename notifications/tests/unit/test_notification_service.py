from unittest.mock import patch

import pytest

from authentication.tests.factories import UserFactory
from notifications.domain.services.notification_service import NotificationService
from notifications.models import Notification
from notifications.tests.factories import NotificationFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestNotificationService:
    def setup_method(self):
        self.service = NotificationService()
        self.user = UserFactory()

    def test_notify_persists_and_pushes(self):
        with patch("notifications.domain.services.notification_service.push_to_group") as push:
            result = self.service.notify(self.user.id, "order", "New order", "Lamp ordered", action_url="/orders")

        assert result.ok
        assert Notification.objects.filter(user=self.user, type="order").count() == 1
        group, message_type, data = push.call_args.args
        assert group == f"notifications_{self.user.id}"
        assert message_type == "notification.created"
        assert data["id"] == str(result.value.id)
        assert data["is_read"] is False

    def test_unknown_type_rejected(self):
        result = self.service.notify(self.user.id, "spam", "x", "y")
        assert result.error == ErrorCodes.INVALID_INPUT
        assert not Notification.objects.exists()

    def test_list_filters(self):
        NotificationFactory(user=self.user, type="order", is_read=True)
        NotificationFactory(user=self.user, type="message")
        NotificationFactory()

        assert len(self.service.list_notifications(self.user).value) == 2
        assert [n.type for n in self.service.list_notifications(self.user, read_filter="unread").value] == ["message"]
        assert [n.type for n in self.service.list_notifications(self.user, read_filter="read").value] == ["order"]
        assert len(self.service.list_notifications(self.user, type="order").value) == 1
        assert self.service.list_notifications(self.user, read_filter="old").error == ErrorCodes.INVALID_INPUT

    def test_read_state(self):
        first = NotificationFactory(user=self.user)
        NotificationFactory(user=self.user)
        other = NotificationFactory()

        assert self.service.unread_count(self.user).value == 2
        assert self.service.mark_read(self.user, first.id).value.is_read
        assert self.service.mark_read(self.user, other.id).error == ErrorCodes.NOTIFICATION_NOT_FOUND
        assert self.service.mark_all_read(self.user).value == 1
        assert self.service.unread_count(self.user).value == 0

    def test_delete_and_clear_read(self):
        kept = NotificationFactory(user=self.user)
        NotificationFactory(user=self.user, is_read=True)
        other = NotificationFactory()

        assert self.service.delete(self.user, other.id).error == ErrorCodes.NOTIFICATION_NOT_FOUND
        assert self.service.delete(self.user, "not-a-uuid").error == ErrorCodes.NOTIFICATION_NOT_FOUND
        assert self.service.clear_read(self.user).value == 1
        assert list(Notification.objects.filter(user=self.user)) == [kept]
        assert self.service.delete(self.user, kept.id).ok
