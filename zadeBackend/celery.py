"""
Celery Configuration for the Zade backend

Background work: boost expiry sweeps and event reminder notifications.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zadeBackend.settings")

app = Celery("zadeBackend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "expire-boosts": {
        "task": "credits.tasks.expire_boosts_task",
        "schedule": 15.0 * 60.0,  # Every 15 minutes
        "options": {"expires": 10.0 * 60.0, "queue": "marketplace_tasks"},
    },
    "send-event-reminders": {
        "task": "notifications.tasks.send_event_reminders_task",
        "schedule": 60.0 * 60.0,  # Hourly
        "options": {"expires": 30.0 * 60.0, "queue": "notification_tasks"},
    },
}

app.conf.update(
    task_routes={
        "credits.tasks.*": {"queue": "marketplace_tasks"},
        "notifications.tasks.*": {"queue": "notification_tasks"},
    },
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=60 * 60 * 24,
    worker_max_tasks_per_child=1000,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=10 * 60,
    task_soft_time_limit=8 * 60,
    beat_scheduler="django_celery_beat.schedulers:DatabaseScheduler",
)
