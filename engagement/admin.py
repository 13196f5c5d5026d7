from django.contrib import admin

from .models import Review, WishlistItem


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("entity_type", "entity_id", "reviewer", "rating", "is_verified_purchase", "created_at")
    list_filter = ("entity_type", "rating", "is_verified_purchase")
    search_fields = ("entity_id", "reviewer__email", "title")


@admin.register(WishlistItem)
class WishlistItemAdmin(admin.ModelAdmin):
    list_display = ("user", "entity_type", "entity_id", "created_at")
    list_filter = ("entity_type",)
