import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from utils.models import BoostableModel, GeoLocatedModel


class FreelancerProfile(GeoLocatedModel):
    AVAILABILITY_CHOICES = [
        ("available", "Available"),
        ("busy", "Busy"),
        ("unavailable", "Unavailable"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="freelancer_profile")

    title = models.CharField(max_length=200)
    bio = models.TextField(blank=True)
    skills = models.JSONField(default=list, blank=True)
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default="CAD")
    category = models.CharField(max_length=100, blank=True, db_index=True)

    portfolio_url = models.URLField(max_length=500, blank=True)
    linkedin_url = models.URLField(max_length=500, blank=True)
    github_url = models.URLField(max_length=500, blank=True)

    experience_years = models.PositiveIntegerField(default=0)
    languages = models.JSONField(default=list, blank=True)
    availability_status = models.CharField(max_length=20, choices=AVAILABILITY_CHOICES, default="available")

    # Maintained by reviews and hires
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    total_reviews = models.PositiveIntegerField(default=0)
    completed_jobs = models.PositiveIntegerField(default=0)
    response_time_hours = models.PositiveIntegerField(default=24)
    is_verified = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "talent"
        ordering = ["-rating", "-created_at"]
        indexes = [
            models.Index(fields=["-rating", "-total_reviews"], name="freelancer_rating_idx"),
            models.Index(fields=["availability_status"], name="freelancer_availability_idx"),
        ]

    def __str__(self):
        return f"{self.user} - {self.title}"


class ArtisteProfile(GeoLocatedModel, BoostableModel):
    CATEGORY_CHOICES = [
        ("musician", "Musician"),
        ("dj", "DJ"),
        ("model", "Model"),
        ("usher", "Usher"),
        ("event_organizer", "Event Organizer"),
        ("venue_manager", "Venue Manager"),
        ("decorator", "Decorator"),
        ("stage_crew", "Stage Crew"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="artiste_profile")

    stage_name = models.CharField(max_length=200)
    bio = models.TextField(blank=True)
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES, default="other", db_index=True)
    specialties = models.JSONField(default=list, blank=True)
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    experience_years = models.PositiveIntegerField(default=0)

    profile_image = models.URLField(max_length=500, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)
    video_urls = models.JSONField(default=list, blank=True)
    audio_urls = models.JSONField(default=list, blank=True)

    website_url = models.URLField(max_length=500, blank=True)
    instagram_url = models.URLField(max_length=500, blank=True)
    facebook_url = models.URLField(max_length=500, blank=True)
    youtube_url = models.URLField(max_length=500, blank=True)

    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    total_reviews = models.PositiveIntegerField(default=0)
    completed_events = models.PositiveIntegerField(default=0)
    is_verified = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "talent"
        ordering = ["-is_boosted", "-rating"]
        indexes = [
            models.Index(fields=["is_boosted", "-boost_score"], name="artiste_boost_idx"),
            models.Index(fields=["-rating"], name="artiste_rating_idx"),
        ]

    def __str__(self):
        return self.stage_name


class FreelanceHire(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("accepted", "Accepted"),
        ("in_progress", "In Progress"),
        ("completed", "Completed"),
        ("cancelled", "Cancelled"),
    ]

    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("paid", "Paid"),
        ("released", "Released"),
        ("disputed", "Disputed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    freelancer = models.ForeignKey(FreelancerProfile, on_delete=models.CASCADE, related_name="hires")
    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="freelance_hires")

    project_title = models.CharField(max_length=200)
    project_description = models.TextField()
    budget = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="CAD")
    timeline_days = models.PositiveIntegerField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")
    deliverables = models.JSONField(default=list, blank=True)
    milestones = models.JSONField(default=list, blank=True)
    contract_url = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "talent"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["client", "-created_at"], name="hire_client_created_idx"),
            models.Index(fields=["freelancer", "-created_at"], name="hire_freelancer_created_idx"),
        ]

    def __str__(self):
        return f"{self.project_title} ({self.status})"
