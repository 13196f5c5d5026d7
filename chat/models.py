from chat.domain.models import Message

__all__ = ["Message"]
