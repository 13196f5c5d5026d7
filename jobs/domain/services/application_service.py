"""
JobApplicationService - applying to jobs and the employer's review pipeline.

Status changes are free-form within the listed statuses: employers move
candidates back and forth while reviewing.
"""

from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from infrastructure.events import get_event_bus
from jobs.domain.events import JobApplicationStatusChangedEvent, JobApplicationSubmittedEvent
from jobs.models import Job, JobApplication
from utils.rbac import can_manage
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

APPLICATION_FIELDS = (
    "cover_letter",
    "resume_url",
    "portfolio_url",
    "expected_salary",
    "availability_date",
    "additional_info",
)
APPLICATION_STATUSES = {choice[0] for choice in JobApplication.STATUS_CHOICES}


class JobApplicationService(BaseService):
    @BaseService.log_performance
    def apply(self, user, job_id, data: Dict[str, Any]) -> ServiceResult[JobApplication]:
        try:
            job = Job.objects.get(pk=job_id)
        except (Job.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.JOB_NOT_FOUND, "Job not found")

        if not job.is_active:
            return service_err(ErrorCodes.JOB_CLOSED, "This job is no longer accepting applications")
        if job.employer_id == user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot apply to your own job")
        if job.application_deadline and job.application_deadline < timezone.localdate():
            return service_err(ErrorCodes.JOB_CLOSED, "The application deadline has passed")
        if JobApplication.objects.filter(job=job, applicant=user).exists():
            return service_err(ErrorCodes.ALREADY_APPLIED, "You have already applied to this job")

        fields = {name: data[name] for name in APPLICATION_FIELDS if data.get(name) is not None}
        try:
            with transaction.atomic():
                application = JobApplication.objects.create(job=job, applicant=user, **fields)
        except IntegrityError:
            return service_err(ErrorCodes.ALREADY_APPLIED, "You have already applied to this job")

        get_event_bus().publish_event(
            JobApplicationSubmittedEvent(
                application_id=str(application.id),
                job_id=str(job.id),
                job_title=job.title,
                employer_id=str(job.employer_id),
                applicant_name=user.display_name,
            )
        )
        self.logger.info(f"User {user.id} applied to job {job.id}")
        return service_ok(application)

    def list_applications(self, user, job_id) -> ServiceResult[List[JobApplication]]:
        """Applications received for a job. Employer (or admin) only."""
        try:
            job = Job.objects.get(pk=job_id)
        except (Job.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.JOB_NOT_FOUND, "Job not found")
        if not can_manage(user, job.employer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the employer can view applications")

        return service_ok(list(job.applications.select_related("applicant").order_by("-created_at")))

    def my_applications(self, user) -> ServiceResult[List[JobApplication]]:
        return service_ok(
            list(JobApplication.objects.filter(applicant=user).select_related("job", "job__employer"))
        )

    @BaseService.log_performance
    def update_application_status(
        self, user, application_id, status: str, notes: Optional[str] = None
    ) -> ServiceResult[JobApplication]:
        if status not in APPLICATION_STATUSES:
            return service_err(ErrorCodes.INVALID_INPUT, f"Unknown application status '{status}'")

        try:
            application = JobApplication.objects.select_related("job").get(pk=application_id)
        except (JobApplication.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.APPLICATION_NOT_FOUND, "Application not found")

        if not can_manage(user, application.job.employer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the employer can update applications")

        application.status = status
        update_fields = ["status", "updated_at"]
        if notes is not None:
            application.notes = notes
            update_fields.append("notes")
        application.save(update_fields=update_fields)

        get_event_bus().publish_event(
            JobApplicationStatusChangedEvent(
                application_id=str(application.id),
                job_id=str(application.job_id),
                job_title=application.job.title,
                applicant_id=str(application.applicant_id),
                status=status,
            )
        )
        return service_ok(application)
