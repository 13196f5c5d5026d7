from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import TransactionTestCase

from authentication.tests.factories import UserFactory
from infrastructure.container import container
from notifications.api.consumers import NotificationConsumer


class NotificationConsumerTests(TransactionTestCase):
    def setUp(self):
        self.user = UserFactory()

    def _communicator(self, user):
        communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), "/ws/notifications/")
        communicator.scope["user"] = user
        return communicator

    async def test_anonymous_rejected(self):
        connected, close_code = await self._communicator(AnonymousUser()).connect()
        self.assertFalse(connected)
        self.assertEqual(close_code, 4001)

    async def test_receives_created_notification(self):
        communicator = self._communicator(self.user)
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        notify = database_sync_to_async(container.notification_service().notify)
        await notify(self.user.id, "system", "Welcome", "Thanks for joining")

        response = await communicator.receive_json_from()
        self.assertEqual(response["type"], "notification.created")
        self.assertEqual(response["data"]["title"], "Welcome")

        await communicator.send_json_to({"type": "ping"})
        self.assertEqual(await communicator.receive_json_from(), {"type": "pong"})
        await communicator.disconnect()
