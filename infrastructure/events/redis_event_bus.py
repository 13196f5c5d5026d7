import json
import logging
import threading
from typing import Callable

import redis
from django.conf import settings
from django.utils import timezone

from .event_bus_interface import EventBus

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "zade.events."


class RedisEventBus(EventBus):
    """Redis pub/sub implementation of event bus."""

    def __init__(self, redis_url: str = None):
        self.redis_url = redis_url or getattr(settings, "REDIS_URL", "redis://localhost:6379/0")
        self.redis_client = redis.from_url(self.redis_url)
        self._subscribers = {}
        self._listening = False

    def publish(self, event_type: str, payload: dict):
        """Publish event to Redis channel. Failures are logged, never raised."""
        message = {"event_type": event_type, "occurred_at": timezone.now().isoformat(), "payload": payload}
        try:
            self.redis_client.publish(f"{CHANNEL_PREFIX}{event_type}", json.dumps(message, default=str))
            logger.info(f"Published event: {event_type}")
        except redis.RedisError as e:
            logger.error(f"Failed to publish event {event_type}: {str(e)}")

    def subscribe(self, event_type: str, handler: Callable):
        self._subscribers.setdefault(event_type, [])
        if handler not in self._subscribers[event_type]:
            self._subscribers[event_type].append(handler)
            logger.info(f"Registered handler for event: {event_type}")

    def start_listening(self, block: bool = False):
        """Consume subscribed channels, in a daemon thread unless block=True."""
        if self._listening or not self._subscribers:
            return

        self._listening = True
        if block:
            self._listen()
            return
        threading.Thread(target=self._listen, name="event-bus-listener", daemon=True).start()

    def _listen(self):
        channels = [f"{CHANNEL_PREFIX}{event_type}" for event_type in self._subscribers]
        try:
            pubsub = self.redis_client.pubsub()
            pubsub.subscribe(*channels)
            logger.info(f"EventBus listening on: {channels}")

            for message in pubsub.listen():
                if message["type"] == "message":
                    self._handle_message(message)
        except redis.RedisError as e:
            logger.error(f"EventBus listener crashed: {e}")
        finally:
            self._listening = False

    def _handle_message(self, message):
        try:
            envelope = json.loads(message["data"])
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to decode event message: {str(e)}")
            return

        event_type = envelope.get("event_type")
        for handler in self._subscribers.get(event_type, []):
            try:
                handler(envelope)
            except Exception as e:
                logger.error(f"Handler error for {event_type}: {str(e)}", exc_info=True)
