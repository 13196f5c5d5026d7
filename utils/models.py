from django.db import models
from django.utils import timezone


class GeoLocatedModel(models.Model):
    """Free-text location plus optional coordinates used by radius search."""

    location = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True, db_index=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class BoostableModel(models.Model):
    """Fields maintained by the credits app when a listing is boosted."""

    is_boosted = models.BooleanField(default=False, db_index=True)
    boost_score = models.PositiveIntegerField(default=0)
    boost_expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def boost_active(self) -> bool:
        return bool(self.is_boosted and self.boost_expires_at and self.boost_expires_at > timezone.now())
