"""
ReviewService - reviews for any entity type.

Handles submit (create or update), listing with a rating summary, and
deletion. Freelancer and artiste profiles carry a denormalized rating that is
recomputed after every write.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Avg, Count

from engagement.domain.events import ReviewSubmittedEvent
from engagement.models import Review
from infrastructure.events import get_event_bus
from marketplace.models import Order
from utils.entities import ENTITY_TYPES, canonical_entity_id, entity_summary, get_entity, get_entity_owner_id
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

# Entity types whose rows store rating / total_reviews
RATED_ENTITY_TYPES = ("freelancer", "artiste")


def rating_summary(entity_type: str, entity_id) -> Dict:
    reviews = Review.objects.filter(entity_type=entity_type, entity_id=canonical_entity_id(entity_id))
    totals = reviews.aggregate(average=Avg("rating"), count=Count("id"))
    distribution = {star: 0 for star in range(1, 6)}
    for row in reviews.values("rating").annotate(count=Count("id")):
        distribution[row["rating"]] = row["count"]

    average = Decimal(str(totals["average"] or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return {"average_rating": average, "total_reviews": totals["count"], "distribution": distribution}


class ReviewService(BaseService):
    @BaseService.log_performance
    def submit_review(self, user, entity_type: str, entity_id, data: Dict) -> ServiceResult[Review]:
        """
        Create the caller's review of an entity, or update it if one exists.

        Returns:
            ServiceResult with the saved Review
        """
        if entity_type not in ENTITY_TYPES:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown entity type: {entity_type}")
        try:
            rating = int(data.get("rating"))
        except (TypeError, ValueError):
            rating = 0
        if not 1 <= rating <= 5:
            return service_err(ErrorCodes.INVALID_INPUT, "Rating must be between 1 and 5")

        entity = get_entity(entity_type, entity_id)
        if entity is None:
            return service_err(ErrorCodes.ENTITY_NOT_FOUND, f"{entity_type.title()} not found")
        owner_id = get_entity_owner_id(entity_type, entity)
        if owner_id == user.pk:
            return service_err(ErrorCodes.CANNOT_REVIEW_OWN, "You cannot review your own listing")

        verified = entity_type == "product" and Order.objects.filter(
            buyer=user, product_id=entity.pk, payment_status="paid"
        ).exists()

        with transaction.atomic():
            review, created = Review.objects.update_or_create(
                reviewer=user,
                entity_type=entity_type,
                entity_id=str(entity.pk),
                defaults={
                    "rating": rating,
                    "title": data.get("title") or "",
                    "comment": data.get("comment") or "",
                    "is_verified_purchase": verified,
                },
            )
            self._refresh_entity_rating(entity_type, entity.pk)

        get_event_bus().publish_event(
            ReviewSubmittedEvent(
                review_id=str(review.id),
                entity_type=entity_type,
                entity_id=str(entity.pk),
                entity_title=entity_summary(entity_type, entity)["title"],
                owner_id=str(owner_id),
                reviewer_name=user.display_name,
                rating=rating,
            )
        )
        self.logger.info(f"{'Created' if created else 'Updated'} review {review.id} on {entity_type} {entity.pk}")
        return service_ok(review)

    def list_reviews(self, entity_type: str, entity_id) -> ServiceResult[Dict]:
        if entity_type not in ENTITY_TYPES:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown entity type: {entity_type}")
        results = list(
            Review.objects.filter(entity_type=entity_type, entity_id=canonical_entity_id(entity_id)).select_related(
                "reviewer"
            )
        )
        return service_ok({"results": results, **rating_summary(entity_type, entity_id)})

    @BaseService.log_performance
    def delete_review(self, user, review_id) -> ServiceResult[None]:
        try:
            review = Review.objects.get(pk=review_id)
        except (Review.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")

        if review.reviewer_id != user.pk and not is_admin(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own reviews")

        with transaction.atomic():
            review.delete()
            self._refresh_entity_rating(review.entity_type, review.entity_id)
        return service_ok(None)

    def _refresh_entity_rating(self, entity_type: str, entity_id) -> Optional[Dict]:
        if entity_type not in RATED_ENTITY_TYPES:
            return None
        summary = rating_summary(entity_type, entity_id)
        ENTITY_TYPES[entity_type].model.objects.filter(pk=entity_id).update(
            rating=summary["average_rating"], total_reviews=summary["total_reviews"]
        )
        return summary
