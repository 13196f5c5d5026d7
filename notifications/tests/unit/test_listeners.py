import pytest

from authentication.tests.factories import UserFactory
from infrastructure.container import container
from jobs.tests.factories import JobFactory
from notifications.infra.events.listeners import LISTENERS, handle_hire_requested
from notifications.models import Notification


@pytest.mark.django_db
class TestNotificationListeners:
    def test_job_application_notifies_employer(self):
        job = JobFactory(title="Backend Developer")
        applicant = UserFactory(full_name="Ada Lovelace")

        assert container.job_application_service().apply(applicant, job.id, {"cover_letter": "Hi"}).ok

        notification = Notification.objects.get(user=job.employer)
        assert notification.type == "job_application"
        assert "Ada Lovelace" in notification.message
        assert "Backend Developer" in notification.message

    def test_message_notifies_receiver(self):
        sender = UserFactory(full_name="Bob")
        receiver = UserFactory()

        container.message_service().send_message(sender, receiver.id, "Is the lamp still available?")

        notification = Notification.objects.get(user=receiver)
        assert notification.type == "message"
        assert notification.title == "New message from Bob"
        assert notification.metadata["sender_id"] == str(sender.id)
        assert not Notification.objects.filter(user=sender).exists()

    def test_handler_without_recipient_is_dropped(self):
        handle_hire_requested(
            {
                "event_type": "hire.requested",
                "payload": {"freelancer_user_id": None, "client_name": "Acme", "project_title": "Logo", "hire_id": "1"},
            }
        )
        assert not Notification.objects.exists()

    def test_every_listener_is_subscribed(self):
        from infrastructure.events import get_event_bus

        bus = get_event_bus()
        for event_type, handler in LISTENERS.items():
            assert handler in bus._subscribers[event_type]
