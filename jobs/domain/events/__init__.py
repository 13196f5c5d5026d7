from .job_events import JobApplicationStatusChangedEvent, JobApplicationSubmittedEvent

__all__ = ["JobApplicationStatusChangedEvent", "JobApplicationSubmittedEvent"]
