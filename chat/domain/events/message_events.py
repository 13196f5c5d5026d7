from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class MessageSentEvent(DomainEvent):
    def __init__(self, message_id: str, sender_id: str, sender_name: str, receiver_id: str, preview: str):
        super().__init__(
            event_type="message.sent",
            payload={
                "message_id": message_id,
                "sender_id": sender_id,
                "sender_name": sender_name,
                "receiver_id": receiver_id,
                "preview": preview,
            },
        )
