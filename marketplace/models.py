from marketplace.domain.models import Cart, CartItem, Order, Product  # noqa: F401
