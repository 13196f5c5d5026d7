from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .api.views import BoostViewSet, CreditViewSet

router = SimpleRouter()
router.register(r"boosts", BoostViewSet, basename="boost")
router.register(r"", CreditViewSet, basename="credit")

app_name = "credits"

urlpatterns = [
    path("", include(router.urls)),
]
