"""
DRF authentication backed by the hosted identity provider.

Reuses simplejwt's header parsing (``Authorization: Bearer <token>``) but
verifies the token with the provider's shared secret instead of our own
signing key, then maps ``sub`` onto a local user row.
"""

import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from .auth_providers import HostedJWTProvider

logger = logging.getLogger(__name__)


class HostedJWTAuthentication(JWTAuthentication):
    provider_class = HostedJWTProvider

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.provider = self.provider_class()

    def get_validated_token(self, raw_token):
        if isinstance(raw_token, bytes):
            raw_token = raw_token.decode("utf-8")
        claims = self.provider.verify_token(raw_token)
        if claims is None:
            raise InvalidToken({"detail": "Given token not valid", "code": "token_not_valid"})
        return claims

    def get_user(self, validated_token):
        from infrastructure.container import container

        result = container.account_service().get_or_provision_user(validated_token)
        if not result.ok:
            logger.info(f"Rejected authenticated request for sub={validated_token.get('sub')}: {result.error}")
            raise AuthenticationFailed(result.error_detail, code=result.error)
        return result.value
