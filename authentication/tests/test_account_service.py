import uuid

from django.test import TestCase

from authentication.domain.services import AccountService
from authentication.tests.factories import UserFactory
from utils.service_base import ErrorCodes


class AccountServiceProvisioningTest(TestCase):
    def setUp(self):
        self.service = AccountService()

    def test_provision_uses_sub_as_primary_key(self):
        sub = uuid.uuid4()
        result = self.service.get_or_provision_user(
            {"sub": str(sub), "email": "fresh@example.com", "user_metadata": {"full_name": "Fresh Face"}}
        )
        self.assertTrue(result.ok)
        self.assertEqual(result.value.pk, sub)
        self.assertEqual(result.value.username, "fresh@example.com")
        self.assertEqual(result.value.full_name, "Fresh Face")

    def test_missing_metadata_gives_blank_name(self):
        result = self.service.get_or_provision_user({"sub": str(uuid.uuid4()), "email": "noname@example.com"})
        self.assertTrue(result.ok)
        self.assertEqual(result.value.full_name, "")
        self.assertEqual(result.value.display_name, "noname")

    def test_malformed_sub(self):
        result = self.service.get_or_provision_user({"sub": "not-a-uuid", "email": "x@example.com"})
        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.INVALID_INPUT)

    def test_missing_email_on_first_sight(self):
        result = self.service.get_or_provision_user({"sub": str(uuid.uuid4())})
        self.assertFalse(result.ok)

    def test_email_owned_by_other_account_conflicts(self):
        UserFactory(email="taken@example.com", username="taken@example.com")
        result = self.service.get_or_provision_user({"sub": str(uuid.uuid4()), "email": "taken@example.com"})
        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.CONFLICT)

    def test_disabled_user(self):
        user = UserFactory(is_disabled=True)
        result = self.service.get_or_provision_user({"sub": str(user.id), "email": user.email})
        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.PERMISSION_DENIED)

    def test_update_profile_ignores_unknown_fields(self):
        user = UserFactory()
        result = self.service.update_profile(user, {"bio": "hello", "is_admin": True})
        self.assertTrue(result.ok)
        user.refresh_from_db()
        self.assertEqual(user.bio, "hello")
        self.assertFalse(user.is_admin)
