"""
AdminDashboardService - platform statistics and moderation for administrators.

Every method takes the acting user first and refuses non-admins with
PERMISSION_DENIED. Admin status is always re-read from the database.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db.models import Count, IntegerField, Q, Sum, Value
from django.db.models.deletion import ProtectedError
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from credits.models import BoostPurchase, CreditAccount, CreditTransaction
from events.models import Event
from jobs.models import Job
from marketplace.models import Order, Product
from utils.rbac import is_admin
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()

# Listing types an admin can moderate, keyed like utils.entities
LISTING_MODELS = {
    "product": (Product, "seller"),
    "job": (Job, "employer"),
    "event": (Event, "organizer"),
}
ANALYTICS_MODELS = {
    "users": User,
    "products": Product,
    "jobs": Job,
    "events": Event,
    "orders": Order,
}
MAX_ANALYTICS_DAYS = 90


class AdminDashboardService(BaseService):
    def _denied(self, user) -> Optional[ServiceResult]:
        if is_admin(user):
            return None
        self.logger.warning(f"Non-admin user {getattr(user, 'id', None)} attempted to access the admin dashboard")
        return service_err(ErrorCodes.PERMISSION_DENIED, "Administrator access required")

    @BaseService.log_performance
    def stats(self, user) -> ServiceResult[Dict[str, Any]]:
        denied = self._denied(user)
        if denied:
            return denied

        today = timezone.localdate()
        revenue = Order.objects.filter(payment_status="paid").aggregate(total=Sum("total_price"))["total"]
        credits = CreditAccount.objects.aggregate(total=Sum("balance"))["total"]
        return service_ok(
            {
                "total_users": User.objects.count(),
                "total_products": Product.objects.count(),
                "total_jobs": Job.objects.count(),
                "total_events": Event.objects.count(),
                "total_orders": Order.objects.count(),
                "total_revenue": revenue or 0,
                "active_boosts": BoostPurchase.objects.filter(is_active=True, expires_at__gt=timezone.now()).count(),
                "new_users_today": User.objects.filter(created_at__date=today).count(),
                "total_credits_in_circulation": credits or 0,
            }
        )

    @BaseService.log_performance
    def analytics(self, user, days: int = 7) -> ServiceResult[Dict[str, Any]]:
        """
        Daily creation counts for the last ``days`` days (today included).

        Each row carries the count for that day and the running total of
        everything created up to the end of it.
        """
        denied = self._denied(user)
        if denied:
            return denied
        if days < 1 or days > MAX_ANALYTICS_DAYS:
            return service_err(ErrorCodes.INVALID_INPUT, f"days must be between 1 and {MAX_ANALYTICS_DAYS}")

        today = timezone.localdate()
        start = today - timedelta(days=days - 1)
        dates = [start + timedelta(days=offset) for offset in range(days)]

        daily: Dict[str, Dict] = {}
        running: Dict[str, int] = {}
        for key, model in ANALYTICS_MODELS.items():
            rows = (
                model.objects.filter(**{"created_at__date__gte": start})
                .annotate(day=TruncDate("created_at"))
                .values("day")
                .annotate(count=Count("pk"))
            )
            daily[key] = {row["day"]: row["count"] for row in rows}
            running[key] = model.objects.filter(**{"created_at__date__lt": start}).count()

        series = []
        for day in dates:
            new = {key: daily[key].get(day, 0) for key in ANALYTICS_MODELS}
            for key, count in new.items():
                running[key] += count
            series.append({"date": day.isoformat(), "new": new, "total": dict(running)})

        return service_ok({"days": days, "series": series})

    def list_users(self, user, search: str = "", limit: int = 100) -> ServiceResult[List]:
        denied = self._denied(user)
        if denied:
            return denied

        users = User.objects.annotate(
            credit_balance=Coalesce("credit_account__balance", Value(0), output_field=IntegerField())
        ).order_by("-created_at")
        if search:
            users = users.filter(
                Q(email__icontains=search) | Q(full_name__icontains=search) | Q(username__icontains=search)
            )
        return service_ok(list(users[:limit]))

    def _get_target(self, user, target_id, action: str) -> ServiceResult:
        denied = self._denied(user)
        if denied:
            return denied
        try:
            target = User.objects.get(pk=target_id)
        except (User.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.USER_NOT_FOUND, "User not found")
        if target.pk == user.pk:
            return service_err(ErrorCodes.CANNOT_MODIFY_SELF, f"You cannot {action} your own account")
        return service_ok(target)

    def toggle_admin(self, user, target_id) -> ServiceResult:
        result = self._get_target(user, target_id, "change admin access on")
        if not result.ok:
            return result
        target = result.value
        target.is_admin = not target.is_admin
        fields = ["is_admin"]
        if not target.is_admin and target.user_type == "admin":
            target.user_type = "buyer"
            fields.append("user_type")
        target.save(update_fields=fields)
        self.logger.info(f"Admin {user.id} set is_admin={target.is_admin} on user {target.id}")
        return service_ok(target)

    def toggle_disabled(self, user, target_id) -> ServiceResult:
        result = self._get_target(user, target_id, "disable")
        if not result.ok:
            return result
        target = result.value
        target.is_disabled = not target.is_disabled
        target.save(update_fields=["is_disabled"])
        self.logger.info(f"Admin {user.id} set is_disabled={target.is_disabled} on user {target.id}")
        return service_ok(target)

    def delete_user(self, user, target_id) -> ServiceResult[None]:
        result = self._get_target(user, target_id, "delete")
        if not result.ok:
            return result
        target = result.value
        try:
            target.delete()
        except ProtectedError:
            return service_err(ErrorCodes.CONFLICT, "User has orders on record; disable the account instead")
        self.logger.warning(f"Admin {user.id} deleted user {target_id}")
        return service_ok(None)

    def listings(self, user, entity_type: str, limit: int = 100) -> ServiceResult[List]:
        denied = self._denied(user)
        if denied:
            return denied
        if entity_type not in LISTING_MODELS:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown listing type: {entity_type}")

        model, owner_field = LISTING_MODELS[entity_type]
        rows = model.objects.select_related(owner_field).order_by("-created_at")[:limit]
        return service_ok(
            [
                {
                    "id": row.id,
                    "entity_type": entity_type,
                    "title": row.title,
                    "owner_id": getattr(row, f"{owner_field}_id"),
                    "owner_email": getattr(row, owner_field).email,
                    "is_active": row.is_active,
                    "is_boosted": row.is_boosted,
                    "created_at": row.created_at,
                }
                for row in rows
            ]
        )

    def toggle_listing_active(self, user, entity_type: str, entity_id) -> ServiceResult[Dict[str, Any]]:
        denied = self._denied(user)
        if denied:
            return denied
        if entity_type not in LISTING_MODELS:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown listing type: {entity_type}")

        model, _ = LISTING_MODELS[entity_type]
        try:
            row = model.objects.get(pk=entity_id)
        except (model.DoesNotExist, ValidationError, ValueError):
            return service_err(ErrorCodes.ENTITY_NOT_FOUND, f"{entity_type.title()} not found")
        row.is_active = not row.is_active
        row.save(update_fields=["is_active"])
        self.logger.info(f"Admin {user.id} set is_active={row.is_active} on {entity_type} {row.id}")
        return service_ok({"id": row.id, "entity_type": entity_type, "is_active": row.is_active})

    def credit_transactions(self, user, limit: int = 200) -> ServiceResult[List]:
        denied = self._denied(user)
        if denied:
            return denied
        return service_ok(list(CreditTransaction.objects.select_related("user").order_by("-created_at")[:limit]))

    def boosts(self, user, active_only: bool = False) -> ServiceResult[List]:
        denied = self._denied(user)
        if denied:
            return denied
        boosts = BoostPurchase.objects.select_related("user").order_by("-created_at")
        if active_only:
            boosts = boosts.filter(is_active=True)
        return service_ok(list(boosts))
