from django.core.management.base import BaseCommand

from infrastructure.events import get_event_bus
from infrastructure.events.redis_event_bus import RedisEventBus


class Command(BaseCommand):
    help = "Consume domain events from Redis and turn them into notifications (blocking)."

    def handle(self, *args, **options):
        event_bus = get_event_bus()
        if not isinstance(event_bus, RedisEventBus):
            self.stdout.write(
                self.style.WARNING(f"{type(event_bus).__name__} dispatches in-process; nothing to consume")
            )
            return

        # Listeners are registered by NotificationsConfig.ready()
        self.stdout.write(self.style.SUCCESS("Listening for domain events on Redis"))
        event_bus.start_listening(block=True)
