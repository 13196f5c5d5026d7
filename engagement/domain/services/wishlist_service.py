"""
WishlistService - saved listings across entity types.
"""

from typing import Dict, List, Optional

from django.core.exceptions import ValidationError

from engagement.models import WishlistItem
from utils.entities import ENTITY_TYPES, canonical_entity_id, entity_summary, get_entity
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class WishlistService(BaseService):
    @BaseService.log_performance
    def toggle(self, user, entity_type: str, entity_id) -> ServiceResult[Dict]:
        if entity_type not in ENTITY_TYPES:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown entity type: {entity_type}")

        existing = WishlistItem.objects.filter(
            user=user, entity_type=entity_type, entity_id=canonical_entity_id(entity_id)
        )
        if existing.exists():
            existing.delete()
            return service_ok({"wishlisted": False})

        entity = get_entity(entity_type, entity_id)
        if entity is None:
            return service_err(ErrorCodes.ENTITY_NOT_FOUND, f"{entity_type.title()} not found")

        WishlistItem.objects.get_or_create(user=user, entity_type=entity_type, entity_id=str(entity.pk))
        return service_ok({"wishlisted": True})

    def list_items(self, user, entity_type: Optional[str] = None) -> ServiceResult[List[Dict]]:
        """Wishlist rows with a resolved summary; rows whose entity is gone are skipped."""
        if entity_type and entity_type not in ENTITY_TYPES:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown entity type: {entity_type}")

        items = WishlistItem.objects.filter(user=user)
        if entity_type:
            items = items.filter(entity_type=entity_type)

        results = []
        for item in items:
            entity = get_entity(item.entity_type, item.entity_id)
            if entity is None:
                continue
            results.append(
                {
                    "id": str(item.id),
                    "entity_type": item.entity_type,
                    "entity_id": item.entity_id,
                    "created_at": item.created_at,
                    "entity": entity_summary(item.entity_type, entity),
                }
            )
        return service_ok(results)

    def remove(self, user, item_id) -> ServiceResult[None]:
        try:
            deleted, _ = WishlistItem.objects.filter(user=user, pk=item_id).delete()
        except (ValidationError, ValueError):
            deleted = 0
        if not deleted:
            return service_err(ErrorCodes.NOT_FOUND, "Wishlist item not found")
        return service_ok(None)

    def check(self, user, entity_type: str, entity_id) -> ServiceResult[Dict]:
        exists = WishlistItem.objects.filter(
            user=user, entity_type=entity_type, entity_id=canonical_entity_id(entity_id)
        ).exists()
        return service_ok({"wishlisted": exists})
