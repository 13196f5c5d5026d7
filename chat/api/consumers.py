import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from utils.realtime import user_group

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """
    Per-user message stream.

    Sending happens over HTTP; this socket only delivers ``chat.message``
    pushes for the connected user and answers keepalive pings.
    """

    async def connect(self):
        self.user = self.scope.get("user")

        if not self.user or not self.user.is_authenticated:
            logger.warning("Unauthenticated connection attempt to chat socket")
            await self.close(code=4001)
            return

        self.group_name = user_group(self.user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"User {self.user.id} connected to chat socket")

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON")
            return

        if data.get("type") == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        else:
            await self.send_error("Unknown message type")

    async def chat_message(self, event):
        """Handler for 'chat.message' events sent from the channel layer."""
        await self.send(text_data=json.dumps({"type": "chat.message", "data": event["data"]}))

    async def send_error(self, message, code="error"):
        await self.send(text_data=json.dumps({"type": "error", "code": code, "message": message}))
