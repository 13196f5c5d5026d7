from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "full_name", "user_type", "is_verified", "is_admin", "is_disabled", "created_at")
    list_filter = ("user_type", "is_verified", "is_admin", "is_disabled", "created_at")
    search_fields = ("email", "full_name", "username", "city")
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at", "last_login")

    fieldsets = (
        (None, {"fields": ("id", "email", "username")}),
        ("Profile", {"fields": ("full_name", "avatar_url", "phone", "bio", "social_links")}),
        ("Location", {"fields": ("location", "city", "state", "country", "latitude", "longitude")}),
        ("Role & status", {"fields": ("user_type", "is_verified", "is_admin", "is_disabled", "is_active")}),
        ("Permissions", {"fields": ("is_staff", "is_superuser", "groups", "user_permissions"), "classes": ("collapse",)}),
        ("Timestamps", {"fields": ("last_login", "created_at", "updated_at"), "classes": ("collapse",)}),
    )
    add_fieldsets = ((None, {"classes": ("wide",), "fields": ("email", "username", "full_name", "user_type")}),)
