"""
Hosted identity provider (Supabase Auth compatible).

Access tokens are HS256 JWTs signed with the project's JWT secret, with the
user id in ``sub`` and the audience ``authenticated``.
"""

import logging
from typing import Any, Dict, Optional

import jwt
from django.conf import settings

from infrastructure.observability.metrics import token_validation_total

from .base import AuthProvider

logger = logging.getLogger(__name__)


class HostedJWTProvider(AuthProvider):
    algorithms = ["HS256"]

    def __init__(self, secret: Optional[str] = None, audience: Optional[str] = None):
        self.secret = secret or getattr(settings, "SUPABASE_JWT_SECRET", "")
        self.audience = audience or getattr(settings, "SUPABASE_JWT_AUDIENCE", "authenticated")
        if not self.secret:
            logger.warning("SUPABASE_JWT_SECRET not configured; every token will be rejected")

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        if not self.secret or not token:
            token_validation_total.labels(status="invalid").inc()
            return None

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired access token")
            token_validation_total.labels(status="expired").inc()
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid access token: {e}")
            token_validation_total.labels(status="invalid").inc()
            return None

        token_validation_total.labels(status="valid").inc()
        return claims
