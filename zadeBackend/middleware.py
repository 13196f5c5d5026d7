"""Custom middleware for the Zade backend."""

import logging
import time
from typing import Callable

from django.conf import settings

logger = logging.getLogger(__name__)


class BearerTokenCSRFExemptMiddleware:
    """Skip CSRF enforcement for requests authenticated by a bearer token.

    API clients authenticate with the hosted provider's access token in the
    Authorization header and never rely on cookies, so CSRF does not apply.
    Session-authenticated requests (Django admin) keep full CSRF protection.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request):
        if request.META.get("HTTP_AUTHORIZATION", "").lower().startswith("bearer "):
            request._dont_enforce_csrf_checks = True
        return self.get_response(request)


class RequestTimingMiddleware:
    """Log API requests slower than settings.SLOW_REQUEST_THRESHOLD_MS."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response
        self.threshold_ms = getattr(settings, "SLOW_REQUEST_THRESHOLD_MS", 1000)

    def __call__(self, request):
        start = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        if elapsed_ms >= self.threshold_ms:
            logger.warning(
                f"Slow request: {request.method} {request.path} -> {response.status_code} in {elapsed_ms:.0f}ms"
            )
        return response
