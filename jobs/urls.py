from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .api.views import JobApplicationViewSet, JobViewSet

router = SimpleRouter()
router.register(r"applications", JobApplicationViewSet, basename="application")
router.register(r"", JobViewSet, basename="job")

app_name = "jobs"

urlpatterns = [
    path("", include(router.urls)),
]
