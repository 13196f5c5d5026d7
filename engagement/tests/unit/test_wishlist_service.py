import pytest

from authentication.tests.factories import UserFactory
from engagement.domain.services.wishlist_service import WishlistService
from engagement.models import WishlistItem
from engagement.tests.factories import WishlistItemFactory
from events.tests.factories import EventFactory
from marketplace.tests.factories import ProductFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
class TestWishlistService:
    def setup_method(self):
        self.service = WishlistService()
        self.user = UserFactory()

    def test_toggle_on_and_off(self):
        product = ProductFactory()
        assert self.service.toggle(self.user, "product", product.id).value == {"wishlisted": True}
        assert self.service.check(self.user, "product", product.id).value == {"wishlisted": True}
        assert self.service.toggle(self.user, "product", product.id).value == {"wishlisted": False}
        assert self.service.check(self.user, "product", product.id).value == {"wishlisted": False}

    def test_toggle_accepts_non_canonical_id(self):
        product = ProductFactory()
        shouted = str(product.id).upper()

        assert self.service.toggle(self.user, "product", shouted).value == {"wishlisted": True}
        assert self.service.check(self.user, "product", shouted).value == {"wishlisted": True}
        assert self.service.toggle(self.user, "product", shouted).value == {"wishlisted": False}
        assert not WishlistItem.objects.filter(user=self.user).exists()

    def test_toggle_missing_entity(self):
        result = self.service.toggle(self.user, "event", "00000000-0000-0000-0000-000000000000")
        assert result.error == ErrorCodes.ENTITY_NOT_FOUND

    def test_list_resolves_and_skips_deleted(self):
        product = ProductFactory(title="Lamp")
        event = EventFactory(title="Concert")
        self.service.toggle(self.user, "product", product.id)
        self.service.toggle(self.user, "event", event.id)
        WishlistItemFactory(user=self.user)  # entity no longer exists

        items = self.service.list_items(self.user).value
        assert {item["entity"]["title"] for item in items} == {"Lamp", "Concert"}

        events_only = self.service.list_items(self.user, "event").value
        assert [item["entity"]["link"] for item in events_only] == [f"/events#{event.id}"]

    def test_remove(self):
        item = WishlistItemFactory(user=self.user)
        assert self.service.remove(UserFactory(), item.id).error == ErrorCodes.NOT_FOUND
        assert self.service.remove(self.user, item.id).ok
