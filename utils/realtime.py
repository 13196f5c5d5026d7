"""
Best-effort websocket pushes through the Channels layer.

Services call these from synchronous code after a write has been committed.
A missing or unreachable channel layer never fails the request: the failure
is logged and counted.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from infrastructure.observability.metrics import realtime_push_failures_total

logger = logging.getLogger(__name__)


def user_group(user_id) -> str:
    return f"user_{user_id}"


def notifications_group(user_id) -> str:
    return f"notifications_{user_id}"


def push_to_group(group_name: str, message_type: str, data: dict) -> bool:
    """
    Send ``{"type": message_type, "data": data}`` to every socket in the group.

    Returns:
        True when the layer accepted the message
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug(f"No channel layer configured, skipping push to {group_name}")
        return False

    try:
        async_to_sync(channel_layer.group_send)(group_name, {"type": message_type, "data": data})
    except Exception as e:
        realtime_push_failures_total.labels(channel=group_name.split("_", 1)[0]).inc()
        logger.warning(f"Realtime push to {group_name} failed: {e}")
        return False
    return True
