from engagement.domain.models import Review, WishlistItem

__all__ = ["Review", "WishlistItem"]
