"""
Notification Celery Tasks

Hourly event reminders for confirmed registrants.
"""

import logging
from datetime import datetime, timedelta

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger(__name__)

REMINDER_WINDOW = timedelta(hours=24)


def _event_start(event) -> datetime:
    start = datetime.combine(event.start_date, event.start_time or datetime.min.time())
    return timezone.make_aware(start) if timezone.is_naive(start) else start


def send_event_reminders(now=None) -> int:
    """
    Notify confirmed registrants of events starting within the next 24 hours.

    Each registration is reminded once; ``reminder_sent_at`` records it.
    """
    from events.models import EventRegistration
    from infrastructure.container import container

    now = now or timezone.now()
    horizon = now + REMINDER_WINDOW
    candidates = EventRegistration.objects.filter(
        status="confirmed",
        reminder_sent_at__isnull=True,
        event__is_active=True,
        event__start_date__gte=timezone.localdate(now) - timedelta(days=1),
        event__start_date__lte=timezone.localdate(horizon),
    ).select_related("event")

    service = container.notification_service()
    sent = 0
    for registration in candidates:
        event = registration.event
        starts_at = _event_start(event)
        if not now <= starts_at <= horizon:
            continue

        when = timezone.localtime(starts_at).strftime("%b %d at %H:%M") if event.start_time else "tomorrow"
        result = service.notify(
            registration.attendee_id,
            "event_reminder",
            f"Reminder: {event.title}",
            f"\"{event.title}\" starts {when}" + (f" at {event.venue}." if event.venue else "."),
            action_url=f"/events#{event.id}",
            metadata={"event_id": str(event.id), "registration_id": str(registration.id)},
        )
        if result.ok:
            registration.reminder_sent_at = now
            registration.save(update_fields=["reminder_sent_at"])
            sent += 1

    logger.info(f"Sent {sent} event reminders")
    return sent


@shared_task(bind=True, max_retries=3, queue="notification_tasks")
def send_event_reminders_task(self):
    """
    Returns:
        dict: {"success": bool, "sent": int}
    """
    try:
        return {"success": True, "sent": send_event_reminders()}
    except Exception as e:
        logger.error(f"Error in event reminder task: {e}")
        try:
            raise self.retry(countdown=60 * (2 ** self.request.retries))
        except self.MaxRetriesExceededError:
            return {"success": False, "sent": 0, "error": f"Max retries exceeded: {e}"}
