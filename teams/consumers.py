# teams/consumers.py
import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError
from rest_framework.exceptions import ValidationError

from .relay import CHAT_MESSAGE, MalformedFrame, parse_frame, relay_chat_frame

logger = logging.getLogger("teamsync.chat")


class ChatConsumer(AsyncWebsocketConsumer):
    """
    Shared chat socket.

    Every connection joins one broadcast group held by the channel layer,
    so connect, disconnect and fan-out are safe across connections. There
    is no authentication, no acknowledgement and no redelivery: a frame
    that fails to parse or persist is logged and dropped, and the
    connection stays open.
    """

    async def connect(self):
        self.group_name = settings.CHAT_BROADCAST_GROUP
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Chat connection opened: channel={self.channel_name}")

    async def disconnect(self, code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)
        logger.info(f"Chat connection closed: channel={self.channel_name}, code={code}")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            frame = parse_frame(text_data if text_data is not None else bytes_data)
        except MalformedFrame as exc:
            logger.warning(f"Dropping malformed chat frame: channel={self.channel_name}, reason={exc}")
            return

        if frame.get("type") != CHAT_MESSAGE:
            logger.debug(f"Ignoring frame type={frame.get('type')!r}: channel={self.channel_name}")
            return

        try:
            outbound = await database_sync_to_async(relay_chat_frame)(frame)
        except ValidationError as exc:
            logger.warning(f"Dropping invalid chat frame: channel={self.channel_name}, errors={exc.detail}")
            return
        except DatabaseError:
            logger.exception(f"Failed to persist chat frame: channel={self.channel_name}")
            return
        except Exception:
            # Driver-level errors (e.g. OverflowError on an out-of-range pk).
            logger.exception(f"Dropping chat frame after unexpected error: channel={self.channel_name}")
            return

        await self.channel_layer.group_send(
            self.group_name,
            {"type": "chat.message", "frame": outbound},
        )

    async def chat_message(self, event):
        await self.send(text_data=json.dumps(event["frame"], cls=DjangoJSONEncoder))
