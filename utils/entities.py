"""
Entity type registry.

Wishlists, reviews and boosts address heterogeneous rows with a
(entity_type, entity_id) pair instead of a foreign key. This module resolves
those pairs back to model instances and knows which field holds the owner.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from django.apps import apps
from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityType:
    app_label: str
    model_name: str
    owner_field: str
    title_field: str
    link_template: str
    boostable: bool = False

    @property
    def model(self):
        return apps.get_model(self.app_label, self.model_name)


ENTITY_TYPES: Dict[str, EntityType] = {
    "product": EntityType("marketplace", "Product", "seller", "title", "/product/{id}", boostable=True),
    "job": EntityType("jobs", "Job", "employer", "title", "/jobs#{id}", boostable=True),
    "event": EntityType("events", "Event", "organizer", "title", "/events#{id}", boostable=True),
    "artiste": EntityType("talent", "ArtisteProfile", "user", "stage_name", "/artistes#{id}", boostable=True),
    "freelancer": EntityType("talent", "FreelancerProfile", "user", "title", "/freelance#{id}"),
}

ENTITY_TYPE_CHOICES = [(key, key.title()) for key in ENTITY_TYPES]
BOOSTABLE_ENTITY_TYPES = [key for key, spec in ENTITY_TYPES.items() if spec.boostable]


def get_entity_type(entity_type: str) -> Optional[EntityType]:
    return ENTITY_TYPES.get(entity_type)


def canonical_entity_id(entity_id) -> str:
    """Stored form of an entity id: lower-case hyphenated UUIDs, other values as given."""
    try:
        return str(uuid.UUID(str(entity_id).strip()))
    except (TypeError, ValueError, AttributeError):
        return str(entity_id)


def get_entity(entity_type: str, entity_id):
    """Return the model instance for (entity_type, entity_id), or None."""
    spec = get_entity_type(entity_type)
    if spec is None:
        return None
    try:
        return spec.model.objects.filter(pk=entity_id).first()
    except (ValueError, ValidationError):
        # Malformed UUIDs
        return None


def get_entity_owner_id(entity_type: str, entity):
    spec = ENTITY_TYPES[entity_type]
    return getattr(entity, f"{spec.owner_field}_id")


def entity_link(entity_type: str, entity_id) -> str:
    spec = get_entity_type(entity_type)
    if spec is None:
        return "/marketplace"
    return spec.link_template.format(id=entity_id)


def entity_summary(entity_type: str, entity) -> dict:
    """Compact, type-agnostic view of an entity for wishlists and boost listings."""
    spec = ENTITY_TYPES[entity_type]
    images = getattr(entity, "images", None) or getattr(entity, "gallery_images", None) or []
    image = getattr(entity, "profile_image", None) or (images[0] if images else None)

    price = None
    for field in ("price", "hourly_rate", "salary_min"):
        value = getattr(entity, field, None)
        if value is not None:
            price = str(value)
            break

    return {
        "id": str(entity.pk),
        "entity_type": entity_type,
        "title": getattr(entity, spec.title_field, "") or "",
        "price": price,
        "image": image,
        "location": getattr(entity, "location", "") or "",
        "link": entity_link(entity_type, entity.pk),
    }
