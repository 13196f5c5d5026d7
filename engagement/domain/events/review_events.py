from dataclasses import dataclass

from infrastructure.events import DomainEvent


@dataclass
class ReviewSubmittedEvent(DomainEvent):
    """Event: a review was created or updated. The entity owner is notified."""

    def __init__(self, review_id: str, entity_type: str, entity_id: str, entity_title: str, owner_id: str,
                 reviewer_name: str, rating: int):
        super().__init__(
            event_type="review.submitted",
            payload={
                "review_id": review_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "entity_title": entity_title,
                "owner_id": owner_id,
                "reviewer_name": reviewer_name,
                "rating": rating,
            },
        )
