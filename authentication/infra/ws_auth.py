import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from django.contrib.auth.models import AnonymousUser
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

from .hosted_auth import HostedJWTAuthentication

logger = logging.getLogger(__name__)


class HandshakeAuthMiddleware:
    """
    Authenticate WebSocket connections via the hosted access token in ``?token=``.
    Intended to be used *after* AuthMiddlewareStack (which handles sessions).
    """

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        if "user" in scope and not isinstance(scope["user"], AnonymousUser):
            return await self.inner(scope, receive, send)

        params = parse_qs(scope.get("query_string", b"").decode())
        token_list = params.get("token")
        if token_list:
            user = await self.get_user_from_token(token_list[0])
            if user:
                scope["user"] = user
                logger.debug(f"Authenticated user {user.id} via WebSocket token")
            else:
                logger.debug("Invalid token provided in WebSocket handshake")

        return await self.inner(scope, receive, send)

    @database_sync_to_async
    def get_user_from_token(self, token):
        auth = HostedJWTAuthentication()
        try:
            claims = auth.get_validated_token(token)
            return auth.get_user(claims)
        except (InvalidToken, TokenError, AuthenticationFailed):
            return None
