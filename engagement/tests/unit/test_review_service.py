from decimal import Decimal

import pytest

from authentication.tests.factories import AdminFactory, UserFactory
from engagement.domain.services.review_service import ReviewService
from engagement.models import Review
from infrastructure.events import get_event_bus
from marketplace.tests.factories import OrderFactory, ProductFactory
from talent.tests.factories import ArtisteProfileFactory, FreelancerProfileFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestSubmitReview:
    def setup_method(self):
        self.service = ReviewService()
        self.reviewer = UserFactory(full_name="Reviewer One")

    def test_second_submission_updates(self):
        product = ProductFactory()
        self.service.submit_review(self.reviewer, "product", product.id, {"rating": 2})
        result = self.service.submit_review(self.reviewer, "product", product.id, {"rating": 4, "comment": "Better"})

        assert result.ok
        assert Review.objects.count() == 1
        assert result.value.rating == 4
        assert result.value.comment == "Better"

    def test_verified_purchase_needs_paid_order(self):
        product = ProductFactory()
        OrderFactory(buyer=self.reviewer, product=product)

        result = self.service.submit_review(self.reviewer, "product", product.id, {"rating": 5})
        assert result.value.is_verified_purchase

        other = ProductFactory()
        OrderFactory(buyer=self.reviewer, product=other, payment_status="pending", status="processing")
        assert not self.service.submit_review(self.reviewer, "product", other.id, {"rating": 5}).value.is_verified_purchase

    def test_cannot_review_own(self):
        product = ProductFactory()
        result = self.service.submit_review(product.seller, "product", product.id, {"rating": 5})
        assert result.error == ErrorCodes.CANNOT_REVIEW_OWN

    def test_validation(self):
        product = ProductFactory()
        assert self.service.submit_review(self.reviewer, "product", product.id, {"rating": 6}).error == ErrorCodes.INVALID_INPUT
        assert self.service.submit_review(self.reviewer, "boat", product.id, {"rating": 5}).error == ErrorCodes.UNKNOWN_ENTITY_TYPE
        assert self.service.submit_review(self.reviewer, "job", product.id, {"rating": 5}).error == ErrorCodes.ENTITY_NOT_FOUND

    def test_profile_rating_recomputed(self):
        profile = FreelancerProfileFactory()
        self.service.submit_review(self.reviewer, "freelancer", profile.id, {"rating": 5})
        self.service.submit_review(UserFactory(), "freelancer", profile.id, {"rating": 4})

        profile.refresh_from_db()
        assert profile.rating == Decimal("4.50")
        assert profile.total_reviews == 2

    def test_notifies_owner(self):
        profile = ArtisteProfileFactory(stage_name="Nova")
        self.service.submit_review(self.reviewer, "artiste", profile.id, {"rating": 3})

        event = get_event_bus().published[-1]
        assert event["event_type"] == "review.submitted"
        assert event["payload"]["owner_id"] == str(profile.user_id)
        assert event["payload"]["entity_title"] == "Nova"
        assert event["payload"]["reviewer_name"] == "Reviewer One"


@pytest.mark.django_db
class TestListAndDelete:
    def setup_method(self):
        self.service = ReviewService()

    def test_summary_and_distribution(self):
        product = ProductFactory()
        for rating in (5, 5, 4, 1):
            self.service.submit_review(UserFactory(), "product", product.id, {"rating": rating})

        summary = self.service.list_reviews("product", product.id).value
        assert summary["total_reviews"] == 4
        assert summary["average_rating"] == Decimal("3.75")
        assert summary["distribution"] == {1: 1, 2: 0, 3: 0, 4: 1, 5: 2}
        assert len(summary["results"]) == 4

    def test_upper_case_id_matches_stored_reviews(self):
        product = ProductFactory()
        self.service.submit_review(UserFactory(), "product", product.id, {"rating": 3})

        summary = self.service.list_reviews("product", str(product.id).upper()).value
        assert summary["total_reviews"] == 1
        assert len(summary["results"]) == 1

    def test_empty_summary(self):
        summary = self.service.list_reviews("product", ProductFactory().id).value
        assert summary["average_rating"] == Decimal("0.00")
        assert summary["total_reviews"] == 0

    def test_delete_by_author_refreshes_rating(self):
        profile = FreelancerProfileFactory()
        reviewer = UserFactory()
        review = self.service.submit_review(reviewer, "freelancer", profile.id, {"rating": 5}).value

        assert self.service.delete_review(reviewer, review.id).ok
        profile.refresh_from_db()
        assert profile.total_reviews == 0
        assert profile.rating == Decimal("0.00")

    def test_delete_permissions(self):
        product = ProductFactory()
        review = self.service.submit_review(UserFactory(), "product", product.id, {"rating": 5}).value

        assert self.service.delete_review(UserFactory(), review.id).error == ErrorCodes.PERMISSION_DENIED
        assert self.service.delete_review(AdminFactory(), review.id).ok
        assert self.service.delete_review(AdminFactory(), review.id).error == ErrorCodes.REVIEW_NOT_FOUND
