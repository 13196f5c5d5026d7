from .cart_views import CartViewSet
from .order_views import OrderViewSet, PaymentWebhookView
from .product_views import ProductViewSet

__all__ = ["CartViewSet", "OrderViewSet", "PaymentWebhookView", "ProductViewSet"]
