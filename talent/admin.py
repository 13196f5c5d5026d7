from django.contrib import admin

from .models import ArtisteProfile, FreelanceHire, FreelancerProfile


@admin.register(FreelancerProfile)
class FreelancerProfileAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "hourly_rate", "availability_status", "rating", "total_reviews", "is_verified")
    list_filter = ("availability_status", "is_verified", "category")
    search_fields = ("title", "user__email", "user__full_name")
    readonly_fields = ("rating", "total_reviews", "completed_jobs", "created_at", "updated_at")


@admin.register(ArtisteProfile)
class ArtisteProfileAdmin(admin.ModelAdmin):
    list_display = ("stage_name", "user", "category", "rating", "is_available", "is_boosted", "is_verified")
    list_filter = ("category", "is_available", "is_verified", "is_boosted")
    search_fields = ("stage_name", "user__email", "bio")
    readonly_fields = ("rating", "total_reviews", "created_at", "updated_at")


@admin.register(FreelanceHire)
class FreelanceHireAdmin(admin.ModelAdmin):
    list_display = ("project_title", "client", "freelancer", "budget", "status", "payment_status", "created_at")
    list_filter = ("status", "payment_status")
    search_fields = ("project_title", "client__email", "freelancer__user__email")
