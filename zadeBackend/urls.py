"""URL configuration for the Zade backend."""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from infrastructure.observability.views import prometheus_metrics

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("api/metrics", prometheus_metrics, name="prometheus-metrics"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/marketplace/", include("marketplace.urls")),
    path("api/jobs/", include("jobs.urls")),
    path("api/events/", include("events.urls")),
    path("api/talent/", include("talent.urls")),
    path("api/credits/", include("credits.urls")),
    path("api/engagement/", include("engagement.urls")),
    path("api/messages/", include("chat.urls")),
    path("api/notifications/", include("notifications.urls")),
    path("api/admin/", include("dashboard.urls")),
    path("api/", include("infrastructure.urls")),
]
