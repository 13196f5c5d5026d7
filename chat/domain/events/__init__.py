from .message_events import MessageSentEvent

__all__ = ["MessageSentEvent"]
