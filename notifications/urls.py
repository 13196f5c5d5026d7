from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .api.views import NotificationViewSet

router = SimpleRouter()
router.register(r"", NotificationViewSet, basename="notification")

app_name = "notifications"

urlpatterns = [
    path("", include(router.urls)),
]
