from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import CartViewSet, OrderViewSet, PaymentWebhookView, ProductViewSet

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"cart", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
    path("webhooks/payments/", PaymentWebhookView.as_view(), name="payment-webhook"),
]
