from notifications.domain.models import Notification

__all__ = ["Notification"]
