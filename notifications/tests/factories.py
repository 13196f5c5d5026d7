import factory

from authentication.tests.factories import UserFactory
from notifications.models import Notification


class NotificationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Notification

    user = factory.SubFactory(UserFactory)
    type = "system"
    title = factory.Sequence(lambda n: f"Notice {n}")
    message = factory.Faker("sentence")
