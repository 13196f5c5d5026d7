from datetime import timedelta

import pytest
from django.utils import timezone

from authentication.tests.factories import AdminFactory, UserFactory
from infrastructure.events import get_event_bus
from jobs.domain.services.application_service import JobApplicationService
from jobs.models import JobApplication
from jobs.tests.factories import JobApplicationFactory, JobFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestJobApplicationService:
    def setup_method(self):
        self.service = JobApplicationService()
        self.job = JobFactory()
        self.applicant = UserFactory(full_name="Ada Lovelace")

    def test_apply_publishes_event_for_employer(self):
        result = self.service.apply(self.applicant, self.job.id, {"cover_letter": "Hello"})
        assert result.ok
        assert result.value.status == "pending"

        events = [e for e in get_event_bus().published if e["event_type"] == "job.application_submitted"]
        assert len(events) == 1
        assert events[0]["payload"]["employer_id"] == str(self.job.employer_id)
        assert events[0]["payload"]["applicant_name"] == "Ada Lovelace"

    def test_duplicate_application(self):
        self.service.apply(self.applicant, self.job.id, {})
        result = self.service.apply(self.applicant, self.job.id, {})
        assert result.error == ErrorCodes.ALREADY_APPLIED
        assert JobApplication.objects.count() == 1

    def test_closed_job(self):
        self.job.is_active = False
        self.job.save()
        assert self.service.apply(self.applicant, self.job.id, {}).error == ErrorCodes.JOB_CLOSED

    def test_deadline_passed(self):
        self.job.application_deadline = timezone.localdate() - timedelta(days=1)
        self.job.save()
        assert self.service.apply(self.applicant, self.job.id, {}).error == ErrorCodes.JOB_CLOSED

    def test_deadline_today_still_open(self):
        self.job.application_deadline = timezone.localdate()
        self.job.save()
        assert self.service.apply(self.applicant, self.job.id, {}).ok

    def test_employer_cannot_apply(self):
        assert self.service.apply(self.job.employer, self.job.id, {}).error == ErrorCodes.PERMISSION_DENIED

    def test_unknown_job(self):
        assert self.service.apply(self.applicant, "nope", {}).error == ErrorCodes.JOB_NOT_FOUND

    def test_list_applications_employer_only(self):
        JobApplicationFactory(job=self.job)
        assert len(self.service.list_applications(self.job.employer, self.job.id).value) == 1
        assert len(self.service.list_applications(AdminFactory(), self.job.id).value) == 1
        assert self.service.list_applications(self.applicant, self.job.id).error == ErrorCodes.PERMISSION_DENIED

    def test_update_status_notifies_applicant(self):
        application = JobApplicationFactory(job=self.job, applicant=self.applicant)
        result = self.service.update_application_status(self.job.employer, application.id, "shortlisted", notes="Strong")
        assert result.ok
        application.refresh_from_db()
        assert application.status == "shortlisted"
        assert application.notes == "Strong"

        events = [e for e in get_event_bus().published if e["event_type"] == "job.application_status_changed"]
        assert events[-1]["payload"]["applicant_id"] == str(self.applicant.id)

    def test_update_status_rejects_unknown_status_and_strangers(self):
        application = JobApplicationFactory(job=self.job)
        assert self.service.update_application_status(self.job.employer, application.id, "hired").error == (
            ErrorCodes.INVALID_INPUT
        )
        assert self.service.update_application_status(self.applicant, application.id, "accepted").error == (
            ErrorCodes.PERMISSION_DENIED
        )
