from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import ArtisteViewSet, FreelancerViewSet, HireViewSet

router = DefaultRouter()
router.register(r"freelancers", FreelancerViewSet, basename="freelancer")
router.register(r"artistes", ArtisteViewSet, basename="artiste")
router.register(r"hires", HireViewSet, basename="hire")

app_name = "talent"

urlpatterns = [
    path("", include(router.urls)),
]
