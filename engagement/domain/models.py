import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from utils.entities import ENTITY_TYPE_CHOICES


class Review(models.Model):
    """A 1-5 star review of any entity type (product, freelancer, artiste...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reviewer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)
    entity_id = models.CharField(max_length=64)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    title = models.CharField(max_length=200, blank=True)
    comment = models.TextField(blank=True)
    is_verified_purchase = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "engagement"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["entity_type", "entity_id"], name="review_entity_idx")]
        constraints = [
            models.UniqueConstraint(fields=["reviewer", "entity_type", "entity_id"], name="unique_reviewer_entity"),
        ]

    def __str__(self):
        return f"{self.rating}* {self.entity_type}:{self.entity_id}"


class WishlistItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="wishlist_items")
    entity_type = models.CharField(max_length=20, choices=ENTITY_TYPE_CHOICES)
    entity_id = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "engagement"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "entity_type", "entity_id"], name="unique_wishlist_entity"),
        ]

    def __str__(self):
        return f"{self.user} likes {self.entity_type}:{self.entity_id}"
