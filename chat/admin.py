from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "sender", "receiver", "subject", "is_read", "created_at")
    list_filter = ("is_read", "created_at")
    search_fields = ("sender__email", "receiver__email", "content")
    readonly_fields = ("thread_id", "created_at", "updated_at")
