from django.contrib import admin

from .models import Event, EventApplication, EventRegistration


class EventRegistrationInline(admin.TabularInline):
    model = EventRegistration
    extra = 0
    fields = ("full_name", "email", "ticket_type", "quantity", "status", "payment_status", "attended")
    readonly_fields = ("full_name", "email", "quantity")


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("title", "organizer", "start_date", "city", "price", "current_attendees", "max_attendees", "is_active")
    list_filter = ("is_active", "featured", "is_boosted", "category")
    search_fields = ("title", "venue", "organizer__email")
    date_hierarchy = "start_date"
    readonly_fields = ("id", "current_attendees", "created_at", "updated_at")
    inlines = [EventRegistrationInline]


@admin.register(EventRegistration)
class EventRegistrationAdmin(admin.ModelAdmin):
    list_display = ("event", "full_name", "quantity", "status", "payment_status", "attended", "created_at")
    list_filter = ("status", "payment_status", "attended")
    search_fields = ("full_name", "email", "event__title")


@admin.register(EventApplication)
class EventApplicationAdmin(admin.ModelAdmin):
    list_display = ("event", "artiste", "role_applied", "quoted_price", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("event__title", "artiste__email", "role_applied")
