"""
Operational endpoints: Prometheus scrape target and Kubernetes-style health probes.
"""

import logging

from django.core.cache import cache
from django.db import connection
from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_GET
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

logger = logging.getLogger(__name__)


@require_GET
def prometheus_metrics(request):
    """Prometheus scrape endpoint."""
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)


@require_GET
def health_live(request):
    """Liveness probe: returns 200 while the process can serve requests at all."""
    return JsonResponse({"status": "ok"}, status=200)


@require_GET
def health_ready(request):
    """
    Readiness probe: can the service handle requests?

    Checks the database, the cache and the event bus transport.
    Status Code: 200 (ready) or 503 (not ready)
    """
    checks = {"database": check_database(), "cache": check_cache(), "event_bus": check_event_bus()}

    all_ok = all(checks.values())
    return JsonResponse({"status": "ready" if all_ok else "not_ready", "checks": checks}, status=200 if all_ok else 503)


def check_database():
    try:
        connection.ensure_connection()
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def check_cache():
    try:
        cache.set("health_check", "ok", timeout=1)
        return cache.get("health_check") == "ok"
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        return False


def check_event_bus():
    from infrastructure.events import get_event_bus

    event_bus = get_event_bus()
    redis_client = getattr(event_bus, "redis_client", None)
    if redis_client is None:
        # In-process bus has nothing to ping
        return True
    try:
        redis_client.ping()
        return True
    except Exception as e:
        logger.error(f"Event bus health check failed: {e}")
        return False
