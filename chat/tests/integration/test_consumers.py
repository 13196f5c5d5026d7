from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import TransactionTestCase

from authentication.tests.factories import UserFactory
from chat.api.consumers import ChatConsumer
from infrastructure.container import container


class ChatConsumerTests(TransactionTestCase):
    def setUp(self):
        self.user = UserFactory()
        self.sender = UserFactory()

    def _communicator(self, user):
        communicator = WebsocketCommunicator(ChatConsumer.as_asgi(), "/ws/chat/")
        communicator.scope["user"] = user
        return communicator

    async def test_anonymous_rejected(self):
        connected, close_code = await self._communicator(AnonymousUser()).connect()
        self.assertFalse(connected)
        self.assertEqual(close_code, 4001)

    async def test_ping_pong(self):
        communicator = self._communicator(self.user)
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        await communicator.send_json_to({"type": "ping"})
        self.assertEqual(await communicator.receive_json_from(), {"type": "pong"})
        await communicator.disconnect()

    async def test_receives_pushed_message(self):
        communicator = self._communicator(self.user)
        await communicator.connect()

        send = database_sync_to_async(container.message_service().send_message)
        await send(self.sender, self.user.id, "Hello over the wire")

        response = await communicator.receive_json_from()
        self.assertEqual(response["type"], "chat.message")
        self.assertEqual(response["data"]["content"], "Hello over the wire")
        self.assertEqual(response["data"]["sender_id"], str(self.sender.id))
        await communicator.disconnect()
