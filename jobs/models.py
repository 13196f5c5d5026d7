from jobs.domain.models import Job, JobApplication

__all__ = ["Job", "JobApplication"]
