"""
ASGI config for the Zade backend.

HTTP goes to Django; websockets (chat and notifications) go through Channels
with token authentication on the handshake.
"""

import os

import django
from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zadeBackend.settings")

# Populate the app registry before importing consumers that touch the ORM.
django.setup()

django_asgi_app = get_asgi_application()

import chat.routing  # noqa: E402
import notifications.routing  # noqa: E402
from authentication.infra.ws_auth import HandshakeAuthMiddleware  # noqa: E402

application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AllowedHostsOriginValidator(
            AuthMiddlewareStack(
                HandshakeAuthMiddleware(
                    URLRouter(chat.routing.websocket_urlpatterns + notifications.routing.websocket_urlpatterns)
                )
            )
        ),
    }
)
