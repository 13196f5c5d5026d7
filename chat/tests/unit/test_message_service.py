import uuid
from unittest.mock import AsyncMock, patch

import pytest

from authentication.tests.factories import UserFactory
from chat.domain.models import thread_id_for
from chat.domain.services.message_service import MessageService
from chat.models import Message
from chat.tests.factories import MessageFactory
from infrastructure.events import get_event_bus
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestSendMessage:
    def setup_method(self):
        self.service = MessageService()
        self.alice = UserFactory(full_name="Alice")
        self.bob = UserFactory(full_name="Bob")

    def test_thread_id_is_symmetric(self):
        assert thread_id_for(self.alice.id, self.bob.id) == thread_id_for(self.bob.id, self.alice.id)

        first = self.service.send_message(self.alice, self.bob.id, "Hi Bob").value
        reply = self.service.send_message(self.bob, self.alice.id, "Hi Alice").value
        assert first.thread_id == reply.thread_id == thread_id_for(self.alice.id, self.bob.id)

    def test_pushes_and_publishes(self):
        with patch("chat.domain.services.message_service.push_to_group") as push:
            message = self.service.send_message(self.alice, self.bob.id, "Hello", subject="Lamp").value

        push.assert_called_once()
        group, message_type, data = push.call_args.args
        assert group == f"user_{self.bob.id}"
        assert message_type == "chat.message"
        assert data["id"] == str(message.id)

        event = get_event_bus().published[-1]
        assert event["event_type"] == "message.sent"
        assert event["payload"]["receiver_id"] == str(self.bob.id)
        assert event["payload"]["sender_name"] == "Alice"

    def test_rejections(self):
        assert self.service.send_message(self.alice, self.alice.id, "me").error == ErrorCodes.CANNOT_MESSAGE_SELF
        assert self.service.send_message(self.alice, self.bob.id, "   ").error == ErrorCodes.VALIDATION_ERROR
        assert self.service.send_message(self.alice, uuid.uuid4(), "hi").error == ErrorCodes.USER_NOT_FOUND

    def test_push_failure_does_not_fail_send(self):
        with patch("utils.realtime.get_channel_layer") as layer:
            layer.return_value.group_send = AsyncMock(side_effect=RuntimeError("redis down"))
            assert self.service.send_message(self.alice, self.bob.id, "Still saved").ok
        assert Message.objects.count() == 1


@pytest.mark.django_db
class TestConversations:
    def setup_method(self):
        self.service = MessageService()
        self.me = UserFactory()
        self.bob = UserFactory()
        self.carol = UserFactory()

    def test_list_groups_by_counterpart(self):
        MessageFactory(sender=self.bob, receiver=self.me)
        MessageFactory(sender=self.bob, receiver=self.me)
        MessageFactory(sender=self.me, receiver=self.carol)
        latest = MessageFactory(sender=self.me, receiver=self.bob, content="latest")

        rows = self.service.list_conversations(self.me).value
        assert [row["user"] for row in rows] == [self.bob, self.carol]
        assert rows[0]["last_message"] == latest
        assert rows[0]["unread_count"] == 2
        assert rows[1]["unread_count"] == 0

    def test_get_conversation_marks_incoming_read(self):
        MessageFactory(sender=self.bob, receiver=self.me)
        outgoing = MessageFactory(sender=self.me, receiver=self.bob)
        MessageFactory(sender=self.carol, receiver=self.me)

        messages = self.service.get_conversation(self.me, self.bob.id).value
        assert len(messages) == 2
        assert self.service.unread_count(self.me).value == 1
        outgoing.refresh_from_db()
        assert outgoing.is_read is False

    def test_clear_only_touches_pair(self):
        MessageFactory(sender=self.bob, receiver=self.me)
        MessageFactory(sender=self.me, receiver=self.bob)
        MessageFactory(sender=self.carol, receiver=self.me)

        assert self.service.clear_conversation(self.me, self.bob.id).value == 2
        assert Message.objects.count() == 1

    def test_export_transcript(self):
        self.me.full_name = "Me"
        self.me.save()
        MessageFactory(sender=self.me, receiver=self.bob, content="Is it available?", subject="Lamp")

        transcript = self.service.export_conversation(self.me, self.bob.id).value
        assert transcript.startswith(f"Conversation between Me and {self.bob.display_name}")
        assert "Me [Lamp]: Is it available?" in transcript
