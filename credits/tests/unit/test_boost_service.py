from datetime import timedelta

import pytest
from django.utils import timezone

from authentication.tests.factories import UserFactory
from credits.domain.services.boost_service import BoostService
from credits.models import BoostPurchase, CreditTransaction
from credits.tests.factories import BoostPurchaseFactory, CreditAccountFactory
from infrastructure.events import get_event_bus
from jobs.tests.factories import JobFactory
from marketplace.tests.factories import ProductFactory
from talent.tests.factories import FreelancerProfileFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestBoostEntity:
    def setup_method(self):
        self.service = BoostService()
        self.product = ProductFactory()
        self.account = CreditAccountFactory(user=self.product.seller, balance=250)

    def test_boost_debits_and_marks_entity(self):
        result = self.service.boost_entity(self.product.seller, "product", self.product.id, "14d")

        assert result.ok
        boost = result.value
        assert boost.credits_spent == 180
        assert boost.expires_at - boost.starts_at == timedelta(days=14)

        self.account.refresh_from_db()
        assert self.account.balance == 70
        entry = CreditTransaction.objects.get(transaction_type="boost")
        assert entry.amount == -180
        assert entry.balance_after == 70

        self.product.refresh_from_db()
        assert self.product.is_boosted
        assert self.product.boost_score == 140
        assert self.product.boost_expires_at == boost.expires_at
        assert get_event_bus().published[-1]["event_type"] == "boost.purchased"

    def test_insufficient_credits_changes_nothing(self):
        result = self.service.boost_entity(self.product.seller, "product", self.product.id, "30d")

        assert result.error == ErrorCodes.INSUFFICIENT_CREDITS
        self.account.refresh_from_db()
        assert self.account.balance == 250
        assert not BoostPurchase.objects.exists()
        self.product.refresh_from_db()
        assert not self.product.is_boosted

    def test_already_boosted(self):
        self.service.boost_entity(self.product.seller, "product", self.product.id, "7d")
        result = self.service.boost_entity(self.product.seller, "product", self.product.id, "7d")
        assert result.error == ErrorCodes.ALREADY_BOOSTED

    def test_expired_boost_can_be_renewed(self):
        self.product.is_boosted = True
        self.product.boost_expires_at = timezone.now() - timedelta(hours=1)
        self.product.save()
        assert self.service.boost_entity(self.product.seller, "product", self.product.id, "7d").ok

    def test_owner_only(self):
        stranger = UserFactory()
        CreditAccountFactory(user=stranger, balance=1000)
        result = self.service.boost_entity(stranger, "product", self.product.id, "7d")
        assert result.error == ErrorCodes.NOT_ENTITY_OWNER

    def test_validation(self):
        seller = self.product.seller
        assert self.service.boost_entity(seller, "spaceship", self.product.id, "7d").error == ErrorCodes.UNKNOWN_ENTITY_TYPE
        assert self.service.boost_entity(seller, "product", self.product.id, "1y").error == ErrorCodes.INVALID_PLAN
        assert self.service.boost_entity(seller, "product", "not-a-uuid", "7d").error == ErrorCodes.ENTITY_NOT_FOUND

    def test_freelancers_are_not_boostable(self):
        profile = FreelancerProfileFactory()
        result = self.service.boost_entity(profile.user, "freelancer", profile.id, "7d")
        assert result.error == ErrorCodes.NOT_BOOSTABLE

    def test_boost_job(self):
        job = JobFactory()
        CreditAccountFactory(user=job.employer, balance=100)
        assert self.service.boost_entity(job.employer, "job", job.id, "7d").ok


@pytest.mark.django_db
class TestExpireBoosts:
    def test_expire_resets_entity(self):
        product = ProductFactory(is_boosted=True, boost_score=70)
        past = timezone.now() - timedelta(days=8)
        BoostPurchaseFactory(user=product.seller, entity_id=str(product.id), starts_at=past)

        assert BoostService().expire_boosts().value == 1

        product.refresh_from_db()
        assert not product.is_boosted
        assert product.boost_score == 0
        assert not BoostPurchase.objects.filter(is_active=True).exists()

    def test_active_boosts_untouched(self):
        product = ProductFactory(is_boosted=True, boost_score=70)
        BoostPurchaseFactory(user=product.seller, entity_id=str(product.id))

        assert BoostService().expire_boosts().value == 0
        product.refresh_from_db()
        assert product.is_boosted

    def test_task_runs_sweep(self):
        from credits.tasks import expire_boosts_task

        BoostPurchaseFactory(starts_at=timezone.now() - timedelta(days=30))
        assert expire_boosts_task.delay().get() == {"success": True, "expired": 1}
