from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import ReviewViewSet, WishlistViewSet

router = DefaultRouter()
router.register(r"reviews", ReviewViewSet, basename="review")
router.register(r"wishlist", WishlistViewSet, basename="wishlist")

app_name = "engagement"

urlpatterns = [
    path("", include(router.urls)),
]
