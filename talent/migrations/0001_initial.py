import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def geo_fields():
    return [
        ("location", models.CharField(blank=True, max_length=255)),
        ("city", models.CharField(blank=True, db_index=True, max_length=100)),
        ("latitude", models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
        ("longitude", models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="FreelancerProfile",
            fields=[
                *geo_fields(),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("bio", models.TextField(blank=True)),
                ("skills", models.JSONField(blank=True, default=list)),
                ("hourly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("currency", models.CharField(default="CAD", max_length=3)),
                ("category", models.CharField(blank=True, db_index=True, max_length=100)),
                ("portfolio_url", models.URLField(blank=True, max_length=500)),
                ("linkedin_url", models.URLField(blank=True, max_length=500)),
                ("github_url", models.URLField(blank=True, max_length=500)),
                ("experience_years", models.PositiveIntegerField(default=0)),
                ("languages", models.JSONField(blank=True, default=list)),
                (
                    "availability_status",
                    models.CharField(
                        choices=[("available", "Available"), ("busy", "Busy"), ("unavailable", "Unavailable")],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("rating", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("total_reviews", models.PositiveIntegerField(default=0)),
                ("completed_jobs", models.PositiveIntegerField(default=0)),
                ("response_time_hours", models.PositiveIntegerField(default=24)),
                ("is_verified", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="freelancer_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-rating", "-created_at"],
                "indexes": [
                    models.Index(fields=["-rating", "-total_reviews"], name="freelancer_rating_idx"),
                    models.Index(fields=["availability_status"], name="freelancer_availability_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ArtisteProfile",
            fields=[
                *geo_fields(),
                ("is_boosted", models.BooleanField(db_index=True, default=False)),
                ("boost_score", models.PositiveIntegerField(default=0)),
                ("boost_expires_at", models.DateTimeField(blank=True, null=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("stage_name", models.CharField(max_length=200)),
                ("bio", models.TextField(blank=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("musician", "Musician"),
                            ("dj", "DJ"),
                            ("model", "Model"),
                            ("usher", "Usher"),
                            ("event_organizer", "Event Organizer"),
                            ("venue_manager", "Venue Manager"),
                            ("decorator", "Decorator"),
                            ("stage_crew", "Stage Crew"),
                            ("other", "Other"),
                        ],
                        db_index=True,
                        default="other",
                        max_length=30,
                    ),
                ),
                ("specialties", models.JSONField(blank=True, default=list)),
                ("hourly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("experience_years", models.PositiveIntegerField(default=0)),
                ("profile_image", models.URLField(blank=True, max_length=500)),
                ("gallery_images", models.JSONField(blank=True, default=list)),
                ("video_urls", models.JSONField(blank=True, default=list)),
                ("audio_urls", models.JSONField(blank=True, default=list)),
                ("website_url", models.URLField(blank=True, max_length=500)),
                ("instagram_url", models.URLField(blank=True, max_length=500)),
                ("facebook_url", models.URLField(blank=True, max_length=500)),
                ("youtube_url", models.URLField(blank=True, max_length=500)),
                ("rating", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=3)),
                ("total_reviews", models.PositiveIntegerField(default=0)),
                ("completed_events", models.PositiveIntegerField(default=0)),
                ("is_verified", models.BooleanField(default=False)),
                ("is_available", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="artiste_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-is_boosted", "-rating"],
                "indexes": [
                    models.Index(fields=["is_boosted", "-boost_score"], name="artiste_boost_idx"),
                    models.Index(fields=["-rating"], name="artiste_rating_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FreelanceHire",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("project_title", models.CharField(max_length=200)),
                ("project_description", models.TextField()),
                ("budget", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="CAD", max_length=3)),
                ("timeline_days", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("accepted", "Accepted"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("released", "Released"),
                            ("disputed", "Disputed"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("deliverables", models.JSONField(blank=True, default=list)),
                ("milestones", models.JSONField(blank=True, default=list)),
                ("contract_url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="freelance_hires",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "freelancer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="hires", to="talent.freelancerprofile"
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["client", "-created_at"], name="hire_client_created_idx"),
                    models.Index(fields=["freelancer", "-created_at"], name="hire_freelancer_created_idx"),
                ],
            },
        ),
    ]
