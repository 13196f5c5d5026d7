from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .api.views import MessageViewSet

router = SimpleRouter()
router.register(r"", MessageViewSet, basename="message")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
