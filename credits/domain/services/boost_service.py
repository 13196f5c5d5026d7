"""
BoostService - spend credits to push a listing up the boosted sort order.
"""

from datetime import timedelta
from typing import Dict, List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from credits.domain.events import BoostPurchasedEvent
from credits.domain.services.credit_service import get_account
from credits.models import BoostPurchase, CreditTransaction
from infrastructure.events import get_event_bus
from infrastructure.observability.metrics import boosts_expired_total, boosts_purchased_total
from infrastructure.observability.tracing import add_span_attributes, get_tracer
from utils.entities import BOOSTABLE_ENTITY_TYPES, ENTITY_TYPES, entity_summary, get_entity_owner_id
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

BOOST_PLANS = {
    "7d": {"days": 7, "credits": 100},
    "14d": {"days": 14, "credits": 180},
    "30d": {"days": 30, "credits": 300},
}

BOOST_SCORE_PER_DAY = 10

tracer = get_tracer(__name__)


class BoostService(BaseService):
    def plans(self) -> ServiceResult[List[Dict]]:
        return service_ok([{"plan": name, **plan} for name, plan in BOOST_PLANS.items()])

    def list_boosts(self, user) -> ServiceResult[List[BoostPurchase]]:
        return service_ok(list(BoostPurchase.objects.filter(user=user)))

    @BaseService.log_performance
    def boost_entity(self, user, entity_type: str, entity_id, plan: str) -> ServiceResult[BoostPurchase]:
        if entity_type not in ENTITY_TYPES:
            return service_err(ErrorCodes.UNKNOWN_ENTITY_TYPE, f"Unknown entity type: {entity_type}")
        if entity_type not in BOOSTABLE_ENTITY_TYPES:
            return service_err(ErrorCodes.NOT_BOOSTABLE, f"{entity_type.title()} listings cannot be boosted")
        if plan not in BOOST_PLANS:
            return service_err(ErrorCodes.INVALID_PLAN, f"Unknown boost plan: {plan}")
        days = BOOST_PLANS[plan]["days"]
        cost = BOOST_PLANS[plan]["credits"]

        with tracer.start_as_current_span("boost_entity") as span:
            add_span_attributes(span, entity_type=entity_type, entity_id=entity_id, plan=plan, user_id=user.id)

            with transaction.atomic():
                model = ENTITY_TYPES[entity_type].model
                try:
                    entity = model.objects.select_for_update().get(pk=entity_id)
                except (model.DoesNotExist, ValidationError, ValueError):
                    return service_err(ErrorCodes.ENTITY_NOT_FOUND, f"{entity_type.title()} not found")

                if get_entity_owner_id(entity_type, entity) != user.pk:
                    return service_err(ErrorCodes.NOT_ENTITY_OWNER, "You can only boost your own listings")

                now = timezone.now()
                if entity.is_boosted and entity.boost_expires_at and entity.boost_expires_at > now:
                    return service_err(ErrorCodes.ALREADY_BOOSTED, "This listing is already boosted")

                account = get_account(user.id, lock=True)
                if account.balance < cost:
                    return service_err(
                        ErrorCodes.INSUFFICIENT_CREDITS,
                        f"Boost costs {cost} credits but your balance is {account.balance}",
                    )

                account.balance -= cost
                account.save(update_fields=["balance", "updated_at"])

                expires_at = now + timedelta(days=days)
                boost = BoostPurchase.objects.create(
                    user=user,
                    entity_type=entity_type,
                    entity_id=str(entity.pk),
                    plan=plan,
                    duration_days=days,
                    credits_spent=cost,
                    starts_at=now,
                    expires_at=expires_at,
                )
                CreditTransaction.objects.create(
                    user=user,
                    amount=-cost,
                    transaction_type="boost",
                    description=f"{plan} boost for {entity_type}",
                    balance_after=account.balance,
                    reference_type=entity_type,
                    reference_id=str(entity.pk),
                )

                entity.is_boosted = True
                entity.boost_score = days * BOOST_SCORE_PER_DAY
                entity.boost_expires_at = expires_at
                entity.save(update_fields=["is_boosted", "boost_score", "boost_expires_at"])

        boosts_purchased_total.labels(entity_type=entity_type, plan=plan).inc()
        get_event_bus().publish_event(
            BoostPurchasedEvent(
                boost_id=str(boost.id),
                user_id=str(user.id),
                entity_type=entity_type,
                entity_id=str(entity.pk),
                entity_title=entity_summary(entity_type, entity)["title"],
                plan=plan,
                expires_at=expires_at.isoformat(),
            )
        )
        self.logger.info(f"User {user.id} boosted {entity_type} {entity.pk} with {plan}")
        return service_ok(boost)

    @BaseService.log_performance
    def expire_boosts(self) -> ServiceResult[int]:
        """Deactivate boosts past their expiry and reset their listings."""
        now = timezone.now()
        expired = 0
        with transaction.atomic():
            for boost in BoostPurchase.objects.select_for_update().filter(is_active=True, expires_at__lte=now):
                boost.is_active = False
                boost.save(update_fields=["is_active"])
                expired += 1

                spec = ENTITY_TYPES.get(boost.entity_type)
                if spec is None:
                    continue
                # A newer campaign on the same listing keeps it boosted
                still_active = BoostPurchase.objects.filter(
                    entity_type=boost.entity_type, entity_id=boost.entity_id, is_active=True, expires_at__gt=now
                ).exists()
                if not still_active:
                    spec.model.objects.filter(pk=boost.entity_id).update(
                        is_boosted=False, boost_score=0, boost_expires_at=None
                    )

        if expired:
            boosts_expired_total.inc(expired)
            self.logger.info(f"Expired {expired} boosts")
        return service_ok(expired)
