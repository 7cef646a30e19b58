# teams/relay.py
"""
Chat relay plumbing shared by the websocket consumer.

Inbound frame:  {"type": "chat_message", "teamId": ..., "userId": ..., "content": ...}
Outbound frame: {"type": "chat_message", "message": <serialized Message>}

Frames are broadcast to every open connection. The server does not scope
by team; clients drop frames whose team_id they are not viewing.
"""
import json
import logging

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Team, Message
from .serializers import MessageSerializer

logger = logging.getLogger("teamsync.chat")

User = get_user_model()

CHAT_MESSAGE = "chat_message"


class MalformedFrame(ValueError):
    """Raised for frames that are not a JSON object."""


class ChatFrameSerializer(serializers.Serializer):
    """Validates the wire shape of an inbound chat frame."""
    teamId = serializers.PrimaryKeyRelatedField(
        queryset=Team.objects.all(),
        pk_field=serializers.UUIDField(),
    )
    userId = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    content = serializers.CharField(allow_blank=False, trim_whitespace=True, max_length=4000)


def parse_frame(raw) -> dict:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedFrame("Frame is not valid UTF-8") from exc
    if not raw:
        raise MalformedFrame("Empty frame")
    try:
        frame = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedFrame(f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(frame, dict):
        raise MalformedFrame("Frame must be a JSON object")
    return frame


def persist_chat_message(frame: dict) -> Message:
    """
    Store the chat line carried by ``frame``.

    Raises rest_framework ValidationError on empty content or a malformed
    or unknown team/user reference.
    """
    serializer = ChatFrameSerializer(data=frame)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data
    return Message.objects.create(
        team=data["teamId"],
        user=data["userId"],
        content=data["content"],
    )


def broadcast_frame(message: Message) -> dict:
    return {"type": CHAT_MESSAGE, "message": MessageSerializer(message).data}


def relay_chat_frame(frame: dict) -> dict:
    """Persist an inbound frame and build the frame to fan out."""
    message = persist_chat_message(frame)
    logger.info(f"Chat message stored: message={message.id}, team={message.team_id}, user={message.user_id}")
    return broadcast_frame(message)


def team_history(team: Team):
    """Persisted messages of a team, newest first."""
    return Message.objects.filter(team=team).select_related("user").order_by("-created_at", "-id")
