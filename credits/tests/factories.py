from datetime import timedelta

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from credits.models import BoostPurchase, CreditAccount, CreditTransaction


class CreditAccountFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CreditAccount
        django_get_or_create = ("user",)

    user = factory.SubFactory(UserFactory)
    balance = 500


class CreditTransactionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CreditTransaction

    user = factory.SubFactory(UserFactory)
    amount = 100
    transaction_type = "purchase"
    balance_after = 100


class BoostPurchaseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = BoostPurchase

    user = factory.SubFactory(UserFactory)
    entity_type = "product"
    entity_id = factory.Faker("uuid4")
    plan = "7d"
    duration_days = 7
    credits_spent = 100
    starts_at = factory.LazyFunction(timezone.now)
    expires_at = factory.LazyAttribute(lambda o: o.starts_at + timedelta(days=o.duration_days))
