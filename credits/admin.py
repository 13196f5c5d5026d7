from django.contrib import admin

from .models import BoostPurchase, CreditAccount, CreditTransaction


@admin.register(CreditAccount)
class CreditAccountAdmin(admin.ModelAdmin):
    list_display = ("user", "balance", "updated_at")
    search_fields = ("user__email",)
    readonly_fields = ("balance",)


@admin.register(CreditTransaction)
class CreditTransactionAdmin(admin.ModelAdmin):
    list_display = ("user", "amount", "transaction_type", "balance_after", "created_at")
    list_filter = ("transaction_type",)
    search_fields = ("user__email", "payment_intent_id", "reference_id")
    readonly_fields = [field.name for field in CreditTransaction._meta.fields]


@admin.register(BoostPurchase)
class BoostPurchaseAdmin(admin.ModelAdmin):
    list_display = ("entity_type", "entity_id", "user", "plan", "credits_spent", "expires_at", "is_active")
    list_filter = ("entity_type", "plan", "is_active")
    search_fields = ("entity_id", "user__email")
