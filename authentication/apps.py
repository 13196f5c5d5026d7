import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """Initialize tracing once per process when enabled."""
        from django.conf import settings

        if not getattr(settings, "ENABLE_TRACING", False):
            return

        from infrastructure.observability.tracing import setup_tracing

        try:
            setup_tracing(
                service_name="zade-backend",
                otlp_endpoint=getattr(settings, "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "") or None,
            )
        except Exception as e:
            logger.warning(f"Failed to initialize OpenTelemetry tracing: {e}")
