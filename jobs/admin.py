from django.contrib import admin

from .models import Job, JobApplication


class JobApplicationInline(admin.TabularInline):
    model = JobApplication
    extra = 0
    fields = ("applicant", "status", "expected_salary", "created_at")
    readonly_fields = ("applicant", "expected_salary", "created_at")


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ("title", "company", "employer", "job_type", "experience_level", "is_active", "is_boosted", "created_at")
    list_filter = ("job_type", "experience_level", "is_active", "is_boosted")
    search_fields = ("title", "company", "description", "employer__email")
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [JobApplicationInline]


@admin.register(JobApplication)
class JobApplicationAdmin(admin.ModelAdmin):
    list_display = ("job", "applicant", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("job__title", "applicant__email")
