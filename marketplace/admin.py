from django.contrib import admin

from .models import Cart, CartItem, Order, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "seller", "category", "price", "stock_quantity", "is_active", "is_boosted", "created_at")
    list_filter = ("is_active", "featured", "is_boosted", "condition", "category")
    search_fields = ("title", "description", "seller__email", "brand")
    readonly_fields = ("id", "created_at", "updated_at")
    list_editable = ("is_active",)

    fieldsets = (
        (None, {"fields": ("id", "seller", "title", "description", "category", "subcategory", "tags")}),
        ("Pricing & Stock", {"fields": ("price", "original_price", "stock_quantity", "condition", "brand", "warranty")}),
        ("Delivery", {"fields": ("delivery_available", "delivery_fee")}),
        ("Location", {"fields": ("location", "city", "latitude", "longitude")}),
        ("Visibility", {"fields": ("is_active", "featured", "is_boosted", "boost_score", "boost_expires_at")}),
        ("Media", {"fields": ("images",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ("product", "quantity", "added_at")


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("user", "item_count", "updated_at")
    search_fields = ("user__email",)
    inlines = [CartItemInline]

    def item_count(self, obj):
        return sum(item.quantity for item in obj.items.all())

    item_count.short_description = "Items"


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "buyer", "seller", "total_price", "status", "payment_status", "created_at")
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("id", "buyer__email", "seller__email", "payment_intent_id", "tracking_number")
    readonly_fields = ("id", "payment_intent_id", "created_at", "updated_at")
    date_hierarchy = "created_at"
