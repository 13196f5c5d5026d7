import uuid

import pytest
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from authentication.infra.auth_providers import HostedJWTProvider
from authentication.tests.factories import UserFactory, make_access_token

User = get_user_model()


@pytest.mark.unit
class TestHostedJWTProvider:
    def setup_method(self):
        self.provider = HostedJWTProvider(secret="unit-secret-with-plenty-of-bytes-123", audience="authenticated")

    def test_valid_token_returns_claims(self):
        sub = uuid.uuid4()
        token = make_access_token(sub, secret="unit-secret-with-plenty-of-bytes-123")
        claims = self.provider.verify_token(token)
        assert claims["sub"] == str(sub)

    def test_wrong_secret_rejected(self):
        token = make_access_token(uuid.uuid4(), secret="another-secret-with-plenty-of-bytes")
        assert self.provider.verify_token(token) is None

    def test_expired_token_rejected(self):
        token = make_access_token(uuid.uuid4(), expires_in=-60, secret="unit-secret-with-plenty-of-bytes-123")
        assert self.provider.verify_token(token) is None

    def test_wrong_audience_rejected(self):
        token = make_access_token(uuid.uuid4(), aud="anon", secret="unit-secret-with-plenty-of-bytes-123")
        assert self.provider.verify_token(token) is None

    def test_garbage_rejected(self):
        assert self.provider.verify_token("not-a-jwt") is None
        assert self.provider.verify_token("") is None


class HostedAuthenticationIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.me_url = "/api/auth/me/"

    def test_first_request_provisions_user(self):
        sub = uuid.uuid4()
        token = make_access_token(sub, email="New.Person@Example.com", full_name="New Person")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(sub))
        self.assertEqual(response.data["email"], "new.person@example.com")
        self.assertEqual(response.data["full_name"], "New Person")
        self.assertEqual(response.data["user_type"], "buyer")
        user = User.objects.get(pk=sub)
        self.assertFalse(user.has_usable_password())

    def test_existing_user_is_reused(self):
        user = UserFactory(full_name="Existing")
        token = make_access_token(user.id, email=user.email, full_name="Ignored")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["full_name"], "Existing")
        self.assertEqual(User.objects.count(), 1)

    def test_invalid_token_is_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer nonsense")
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_expired_token_is_401(self):
        token = make_access_token(uuid.uuid4(), expires_in=-5)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(self.me_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_disabled_user_is_rejected(self):
        user = UserFactory(is_disabled=True)
        token = make_access_token(user.id, email=user.email)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_anonymous_request_is_401(self):
        response = self.client.get(self.me_url)
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
