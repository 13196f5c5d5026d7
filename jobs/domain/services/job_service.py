"""
JobService - job board listing and employer-side job management.
"""

from typing import Any, Dict, List

from django.core.exceptions import ValidationError

from jobs.filters import JobFilter
from jobs.models import Job
from utils.listing import BOOSTED_ORDERING, build_listing
from utils.rbac import can_manage
from utils.serializers import normalize_string_list
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

JOB_SORT_ORDERS = {
    "newest": ("-created_at",),
    "salary_high": ("-salary_max", "-created_at"),
    "salary_low": ("salary_min", "-created_at"),
    "boosted": BOOSTED_ORDERING,
}

PROTECTED_FIELDS = {"id", "employer", "employer_id", "is_boosted", "boost_score", "boost_expires_at", "featured"}
LIST_FIELDS = ("requirements", "skills_required")


class JobService(BaseService):
    @BaseService.log_performance
    def list_jobs(self, params) -> ServiceResult[Dict]:
        queryset = Job.objects.filter(is_active=True).select_related("employer")
        queryset = JobFilter(params, queryset=queryset).qs
        return build_listing(queryset, params, JOB_SORT_ORDERS, default_sort="newest")

    def get_job(self, job_id, user=None) -> ServiceResult[Job]:
        try:
            job = Job.objects.select_related("employer").get(pk=job_id)
        except (Job.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.JOB_NOT_FOUND, "Job not found")

        if not job.is_active and not (user and user.is_authenticated and can_manage(user, job.employer_id)):
            return service_err(ErrorCodes.JOB_NOT_FOUND, "Job not found")
        return service_ok(job)

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        fields = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        for name in LIST_FIELDS:
            if name in fields:
                fields[name] = normalize_string_list(fields[name])
        return fields

    @BaseService.log_performance
    def create_job(self, employer, data: Dict[str, Any]) -> ServiceResult[Job]:
        fields = self._clean(data)
        fields["is_active"] = True
        fields["featured"] = False

        job = Job.objects.create(employer=employer, **fields)
        self.logger.info(f"Employer {employer.id} posted job {job.id}")
        return service_ok(job)

    @BaseService.log_performance
    def update_job(self, user, job_id, data: Dict[str, Any]) -> ServiceResult[Job]:
        result = self._get_managed(user, job_id)
        if not result.ok:
            return result
        job = result.value

        for key, value in self._clean(data).items():
            setattr(job, key, value)
        job.save()
        return service_ok(job)

    @BaseService.log_performance
    def delete_job(self, user, job_id) -> ServiceResult[None]:
        result = self._get_managed(user, job_id)
        if not result.ok:
            return result
        result.value.delete()
        self.logger.info(f"User {user.id} deleted job {job_id}")
        return service_ok(None)

    def my_jobs(self, user) -> ServiceResult[List[Job]]:
        return service_ok(list(Job.objects.filter(employer=user).order_by("-created_at")))

    def _get_managed(self, user, job_id) -> ServiceResult[Job]:
        try:
            job = Job.objects.get(pk=job_id)
        except (Job.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.JOB_NOT_FOUND, "Job not found")
        if not can_manage(user, job.employer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the employer can modify this job")
        return service_ok(job)
