import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from utils.models import BoostableModel, GeoLocatedModel


class Event(GeoLocatedModel, BoostableModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organizer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="organized_events")

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)

    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    venue = models.CharField(max_length=255, blank=True)

    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    # Null means unlimited capacity
    max_attendees = models.PositiveIntegerField(null=True, blank=True)
    current_attendees = models.PositiveIntegerField(default=0)

    images = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "events"
        ordering = ["start_date", "start_time"]
        indexes = [
            models.Index(fields=["is_active", "start_date"], name="event_active_start_idx"),
            models.Index(fields=["organizer", "is_active"], name="event_organizer_active_idx"),
            models.Index(fields=["is_boosted", "-boost_score"], name="event_boost_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def is_free(self) -> bool:
        return self.price <= 0

    @property
    def spots_left(self):
        if self.max_attendees is None:
            return None
        return max(self.max_attendees - self.current_attendees, 0)


class EventRegistration(models.Model):
    TICKET_TYPE_CHOICES = [
        ("regular", "Regular"),
        ("vip", "VIP"),
        ("early_bird", "Early Bird"),
    ]

    STATUS_CHOICES = [
        ("confirmed", "Confirmed"),
        ("pending_payment", "Pending Payment"),
        ("cancelled", "Cancelled"),
    ]

    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("paid", "Paid"),
        ("failed", "Failed"),
        ("refunded", "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    attendee = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_registrations")

    full_name = models.CharField(max_length=255)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    special_requests = models.TextField(blank=True)

    ticket_type = models.CharField(max_length=20, choices=TICKET_TYPE_CHOICES, default="regular")
    quantity = models.PositiveIntegerField(default=1)
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="confirmed")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")
    attended = models.BooleanField(default=False)
    check_in_time = models.DateTimeField(null=True, blank=True)
    reminder_sent_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "events"
        ordering = ["-created_at"]
        constraints = [models.UniqueConstraint(fields=["event", "attendee"], name="unique_event_attendee")]

    def __str__(self):
        return f"{self.full_name} @ {self.event_id} ({self.status})"


class EventApplication(models.Model):
    """An artiste offering to perform or work at an event."""

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("reviewed", "Reviewed"),
        ("accepted", "Accepted"),
        ("rejected", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="applications")
    artiste = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_applications")
    artiste_profile = models.ForeignKey(
        "talent.ArtisteProfile", on_delete=models.SET_NULL, null=True, blank=True, related_name="event_applications"
    )

    role_applied = models.CharField(max_length=100)
    proposal = models.TextField()
    quoted_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "events"
        ordering = ["-created_at"]
        constraints = [models.UniqueConstraint(fields=["event", "artiste"], name="unique_event_artiste")]

    def __str__(self):
        return f"{self.artiste} for {self.event_id} as {self.role_applied}"
