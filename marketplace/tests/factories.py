import uuid
from decimal import Decimal

import factory
from faker import Faker

from authentication.tests.factories import SellerFactory, UserFactory
from marketplace.models import Cart, CartItem, Order, Product

fake = Faker()


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    seller = factory.SubFactory(SellerFactory)
    title = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    price = Decimal("100.00")
    category = "Electronics"
    images = factory.LazyFunction(lambda: [fake.image_url()])
    tags = factory.LazyFunction(list)
    stock_quantity = 10
    condition = "new"
    is_active = True
    city = "Toronto"


class CartFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Cart
        django_get_or_create = ("user",)

    user = factory.SubFactory(UserFactory)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    id = factory.LazyFunction(uuid.uuid4)
    buyer = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.LazyAttribute(lambda o: o.product.seller)
    quantity = 1
    unit_price = factory.LazyAttribute(lambda o: o.product.price)
    total_price = factory.LazyAttribute(lambda o: o.unit_price * o.quantity)
    status = "confirmed"
    payment_status = "paid"
    delivery_address = factory.LazyFunction(
        lambda: {"street": "1 King St W", "city": "Toronto", "state": "ON", "postal_code": "M5H 1A1", "country": "Canada"}
    )
    payment_intent_id = factory.LazyFunction(lambda: f"pi_mock_{uuid.uuid4().hex[:16]}")


ADDRESS = {"street": "1 King St W", "city": "Toronto", "state": "ON", "postal_code": "M5H 1A1", "country": "Canada"}
