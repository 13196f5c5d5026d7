from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class JobApplicationSubmittedEvent(DomainEvent):
    """Event: someone applied to a job. The employer is notified."""

    def __init__(self, application_id: str, job_id: str, job_title: str, employer_id: str, applicant_name: str):
        super().__init__(
            event_type="job.application_submitted",
            payload={
                "application_id": application_id,
                "job_id": job_id,
                "job_title": job_title,
                "employer_id": employer_id,
                "applicant_name": applicant_name,
            },
        )


@dataclass
class JobApplicationStatusChangedEvent(DomainEvent):
    """Event: the employer moved an application along. The applicant is notified."""

    def __init__(self, application_id: str, job_id: str, job_title: str, applicant_id: str, status: str):
        super().__init__(
            event_type="job.application_status_changed",
            payload={
                "application_id": application_id,
                "job_id": job_id,
                "job_title": job_title,
                "applicant_id": applicant_id,
                "status": status,
            },
        )
