from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .api.views import EventApplicationViewSet, EventViewSet, RegistrationViewSet

router = SimpleRouter()
router.register(r"registrations", RegistrationViewSet, basename="registration")
router.register(r"applications", EventApplicationViewSet, basename="application")
router.register(r"", EventViewSet, basename="event")

app_name = "events"

urlpatterns = [
    path("", include(router.urls)),
]
