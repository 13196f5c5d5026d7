from decimal import Decimal

import pytest

from authentication.tests.factories import UserFactory
from events.domain.services.registration_service import RegistrationService
from events.models import EventRegistration
from events.tests.factories import EventFactory, EventRegistrationFactory
from infrastructure.events import get_event_bus
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestRegister:
    def setup_method(self):
        self.service = RegistrationService()
        self.attendee = UserFactory(full_name="Grace Hopper")

    def test_free_event_confirms_immediately(self):
        event = EventFactory()
        result = self.service.register(self.attendee, event.id, {})

        assert result.ok
        assert result.value.status == "confirmed"
        assert result.value.payment_status == "paid"
        assert result.value.full_name == "Grace Hopper"
        event.refresh_from_db()
        assert event.current_attendees == 1

    def test_paid_event_holds_seats_pending_payment(self):
        event = EventFactory(price=Decimal("25.00"))
        result = self.service.register(self.attendee, event.id, {"quantity": 2})

        assert result.value.status == "pending_payment"
        assert result.value.payment_status == "pending"
        assert result.value.total_price == Decimal("50.00")
        event.refresh_from_db()
        assert event.current_attendees == 2

    def test_sold_out(self):
        event = EventFactory(max_attendees=2, current_attendees=1)
        result = self.service.register(self.attendee, event.id, {"quantity": 2})
        assert result.error == ErrorCodes.EVENT_SOLD_OUT
        assert not EventRegistration.objects.exists()

    def test_unlimited_capacity(self):
        event = EventFactory(max_attendees=None, current_attendees=5000)
        assert self.service.register(self.attendee, event.id, {}).ok

    def test_duplicate_registration(self):
        event = EventFactory()
        self.service.register(self.attendee, event.id, {})
        assert self.service.register(self.attendee, event.id, {}).error == ErrorCodes.ALREADY_REGISTERED

    def test_reregister_after_cancel_reuses_row(self):
        event = EventFactory()
        registration = self.service.register(self.attendee, event.id, {}).value
        self.service.cancel_registration(self.attendee, registration.id)

        result = self.service.register(self.attendee, event.id, {})
        assert result.ok
        assert result.value.id == registration.id
        assert result.value.status == "confirmed"
        event.refresh_from_db()
        assert event.current_attendees == 1

    def test_publishes_event_for_organizer(self):
        event = EventFactory()
        self.service.register(self.attendee, event.id, {})
        published = [e for e in get_event_bus().published if e["event_type"] == "event.registration_created"]
        assert published[0]["payload"]["organizer_id"] == str(event.organizer_id)
        assert published[0]["payload"]["attendee_name"] == "Grace Hopper"

    def test_inactive_event(self):
        event = EventFactory(is_active=False)
        assert self.service.register(self.attendee, event.id, {}).error == ErrorCodes.EVENT_NOT_FOUND


@pytest.mark.django_db
class TestCancelAndCheckIn:
    def setup_method(self):
        self.service = RegistrationService()

    def test_cancel_releases_seats(self):
        registration = EventRegistrationFactory(quantity=3, event__current_attendees=3)
        result = self.service.cancel_registration(registration.attendee, registration.id)

        assert result.value.status == "cancelled"
        registration.event.refresh_from_db()
        assert registration.event.current_attendees == 0

    def test_cancel_twice(self):
        registration = EventRegistrationFactory(status="cancelled")
        result = self.service.cancel_registration(registration.attendee, registration.id)
        assert result.error == ErrorCodes.INVALID_STATUS_TRANSITION

    def test_only_attendee_can_cancel(self):
        registration = EventRegistrationFactory()
        result = self.service.cancel_registration(UserFactory(), registration.id)
        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_organizer_checks_in(self):
        registration = EventRegistrationFactory()
        result = self.service.check_in(registration.event.organizer, registration.id)
        assert result.value.attended is True
        assert result.value.check_in_time is not None

    def test_attendee_cannot_check_in_self(self):
        registration = EventRegistrationFactory()
        assert self.service.check_in(registration.attendee, registration.id).error == ErrorCodes.PERMISSION_DENIED
