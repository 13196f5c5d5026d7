import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    """
    Local mirror of an account owned by the hosted auth provider.

    The primary key equals the provider's user id (the token ``sub`` claim), so
    rows are provisioned on first authenticated request and never need a
    separate mapping table. Passwords are unusable: credentials live with the
    provider.
    """

    USER_TYPE_CHOICES = [
        ("buyer", "Buyer"),
        ("seller", "Seller"),
        ("freelancer", "Freelancer"),
        ("employer", "Employer"),
        ("admin", "Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255, blank=True)
    avatar_url = models.URLField(max_length=500, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    bio = models.TextField(blank=True)

    # Location (free text plus optional coordinates for radius search)
    location = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True, default="Canada")
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    social_links = models.JSONField(default=dict, blank=True)

    user_type = models.CharField(max_length=20, choices=USER_TYPE_CHOICES, default="buyer")
    is_verified = models.BooleanField(default=False)
    is_admin = models.BooleanField(default=False)
    is_disabled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user_type"], name="user_type_idx"),
            models.Index(fields=["created_at"], name="user_created_idx"),
        ]

    @property
    def display_name(self) -> str:
        return self.full_name or self.email.split("@")[0]

    @property
    def has_admin_access(self) -> bool:
        return bool(self.is_superuser or self.is_admin)

    def __str__(self):
        return self.email
