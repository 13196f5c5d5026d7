"""
MessageService - one-to-one messaging.

Messages are persisted first, then pushed to the receiver's ``user_<id>``
websocket group and announced on the event bus (which raises a
notification).
"""

from typing import Dict, List

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db.models import Q
from django.utils import timezone

from chat.domain.events import MessageSentEvent
from chat.models import Message
from infrastructure.events import get_event_bus
from utils.realtime import push_to_group, user_group
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

PREVIEW_LENGTH = 100

User = get_user_model()


def message_payload(message: Message) -> Dict:
    return {
        "id": str(message.id),
        "thread_id": str(message.thread_id),
        "sender_id": str(message.sender_id),
        "receiver_id": str(message.receiver_id),
        "subject": message.subject,
        "content": message.content,
        "attachments": message.attachments,
        "is_read": message.is_read,
        "created_at": message.created_at.isoformat(),
    }


def between(user_a, user_b_id):
    return Q(sender=user_a, receiver_id=user_b_id) | Q(sender_id=user_b_id, receiver=user_a)


class MessageService(BaseService):
    def _get_counterpart(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValidationError, ValueError):
            return None

    @BaseService.log_performance
    def send_message(self, sender, receiver_id, content: str, subject: str = "", attachments=None) -> ServiceResult[Message]:
        content = (content or "").strip()
        if not content:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Message content is required")
        if str(receiver_id) == str(sender.pk):
            return service_err(ErrorCodes.CANNOT_MESSAGE_SELF, "You cannot message yourself")

        receiver = self._get_counterpart(receiver_id)
        if receiver is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "Recipient not found")

        message = Message.objects.create(
            sender=sender,
            receiver=receiver,
            subject=subject or "",
            content=content,
            attachments=list(attachments or []),
        )

        push_to_group(user_group(receiver.pk), "chat.message", message_payload(message))
        get_event_bus().publish_event(
            MessageSentEvent(
                message_id=str(message.id),
                sender_id=str(sender.pk),
                sender_name=sender.display_name,
                receiver_id=str(receiver.pk),
                preview=content[:PREVIEW_LENGTH],
            )
        )
        return service_ok(message)

    def list_conversations(self, user) -> ServiceResult[List[Dict]]:
        """One row per counterpart, most recent first."""
        messages = (
            Message.objects.filter(Q(sender=user) | Q(receiver=user))
            .select_related("sender", "receiver")
            .order_by("-created_at")
        )

        conversations: Dict[str, Dict] = {}
        for message in messages:
            other = message.receiver if message.sender_id == user.pk else message.sender
            key = str(other.pk)
            if key not in conversations:
                conversations[key] = {
                    "thread_id": str(message.thread_id),
                    "user": other,
                    "last_message": message,
                    "last_message_at": message.created_at,
                    "unread_count": 0,
                }
            if message.receiver_id == user.pk and not message.is_read:
                conversations[key]["unread_count"] += 1

        return service_ok(list(conversations.values()))

    def get_conversation(self, user, other_user_id) -> ServiceResult[List[Message]]:
        """Every message with one counterpart, oldest first. Incoming ones are marked read."""
        other = self._get_counterpart(other_user_id)
        if other is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        Message.objects.filter(sender=other, receiver=user, is_read=False).update(
            is_read=True, updated_at=timezone.now()
        )
        return service_ok(list(Message.objects.filter(between(user, other.pk)).order_by("created_at")))

    @BaseService.log_performance
    def clear_conversation(self, user, other_user_id) -> ServiceResult[int]:
        other = self._get_counterpart(other_user_id)
        if other is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        deleted, _ = Message.objects.filter(between(user, other.pk)).delete()
        self.logger.info(f"User {user.pk} cleared {deleted} messages with {other.pk}")
        return service_ok(deleted)

    def export_conversation(self, user, other_user_id) -> ServiceResult[str]:
        """Plain-text transcript of a conversation."""
        other = self._get_counterpart(other_user_id)
        if other is None:
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")

        names = {user.pk: user.display_name, other.pk: other.display_name}
        lines = [f"Conversation between {user.display_name} and {other.display_name}", ""]
        for message in Message.objects.filter(between(user, other.pk)).order_by("created_at"):
            stamp = timezone.localtime(message.created_at).strftime("%Y-%m-%d %H:%M")
            subject = f" [{message.subject}]" if message.subject else ""
            lines.append(f"[{stamp}] {names[message.sender_id]}{subject}: {message.content}")
        return service_ok("\n".join(lines) + "\n")

    def unread_count(self, user) -> ServiceResult[int]:
        return service_ok(Message.objects.filter(receiver=user, is_read=False).count())
