import uuid

from django.conf import settings
from django.db import models

# Fixed namespace so a user pair always maps to the same thread id
THREAD_NAMESPACE = uuid.UUID("6f1c1d9e-3b57-4a55-9d43-2b0c6e0e9a41")


def thread_id_for(user_a_id, user_b_id) -> uuid.UUID:
    first, second = sorted([str(user_a_id), str(user_b_id)])
    return uuid.uuid5(THREAD_NAMESPACE, f"{first}:{second}")


class Message(models.Model):
    """A direct message. Conversations are the messages sharing a thread_id."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_messages")
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_messages"
    )
    thread_id = models.UUIDField(db_index=True)

    subject = models.CharField(max_length=200, blank=True)
    content = models.TextField()
    attachments = models.JSONField(default=list, blank=True)
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "chat"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["thread_id", "created_at"], name="message_thread_created_idx"),
            models.Index(fields=["receiver", "is_read"], name="message_receiver_read_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self.thread_id:
            self.thread_id = thread_id_for(self.sender_id, self.receiver_id)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Message {self.id} from {self.sender_id} to {self.receiver_id}"
