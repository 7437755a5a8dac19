from datetime import datetime, timezone
from urllib.parse import quote

from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


DEFAULT_EMBED_COLOR = "5865F2"


def _color(value) -> int:
    raw = str(value or DEFAULT_EMBED_COLOR).lstrip("#")
    try:
        return int(raw, 16)
    except ValueError:
        return int(DEFAULT_EMBED_COLOR, 16)


def _messages_path(params) -> str:
    return f"/channels/{quote(str(params['channelId']), safe='')}/messages"


def _send_embed(params):
    body = {
        "content": params["message"],
        "embeds": [
            {
                "title": params["embedTitle"],
                "description": params["embedDescription"],
                "color": _color(params.get("embedColor")),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ],
    }
    return HttpCall(method="POST", path=_messages_path(params), json_body=body)


def _message_sent(ex: Exchange):
    return {
        "messageId": ex.payload.get("id"),
        "channelId": ex.params["channelId"],
        "content": ex.params["message"],
        "sentAt": ex.timestamp,
    }


def _embed_sent(ex: Exchange):
    return {
        "messageId": ex.payload.get("id"),
        "channelId": ex.params["channelId"],
        "embedTitle": ex.params["embedTitle"],
        "embedDescription": ex.params["embedDescription"],
        "sentAt": ex.timestamp,
    }


def _channel_messages(ex: Exchange):
    messages = ex.payload if isinstance(ex.payload, list) else []
    return {
        "channelId": ex.params["channelId"],
        "messages": [
            {
                "id": m.get("id"),
                "content": m.get("content"),
                "author": (m.get("author") or {}).get("username"),
                "timestamp": m.get("timestamp"),
            }
            for m in messages
        ],
    }


EMBED_REQUIRED = "Message, embed title, and description are required"

PROVIDER = ProviderSpec(
    name="discord",
    title="Discord",
    base_url="https://discord.com/api/v10",
    doc="Post to and read from a Discord channel as a bot.",
    auth=AuthSpec(type="bot", credential="botToken", message="Bot token is required"),
    required={"channelId": "Channel ID is required"},
    error_fields=["message"],
    status_hints={
        401: "Invalid bot token. Please check your bot token",
        403: "Bot lacks permissions. Check: 1) Bot has \"Send Messages\" permission 2) Bot role is above channel permissions 3) Channel allows bot access",
        404: "Channel not found. Check your channel ID and ensure bot is in the server",
    },
    actions={
        "send_message": ActionSpec(
            name="send_message",
            title="Send message",
            required={"message": "Message content is required"},
            request=lambda params: HttpCall(method="POST", path=_messages_path(params), json_body={"content": params["message"]}),
            extract=_message_sent,
        ),
        "send_embed": ActionSpec(
            name="send_embed",
            title="Send embed",
            required={"message": EMBED_REQUIRED, "embedTitle": EMBED_REQUIRED, "embedDescription": EMBED_REQUIRED},
            status_hints={
                403: "Bot lacks permissions. Check: 1) Bot has \"Send Messages\" and \"Embed Links\" permissions 2) Bot role is above channel permissions",
            },
            request=_send_embed,
            extract=_embed_sent,
        ),
        "get_channel_messages": ActionSpec(
            name="get_channel_messages",
            title="Get channel messages",
            status_hints={
                403: "Bot lacks permissions. Check: 1) Bot has \"Read Message History\" permission 2) Bot role is above channel permissions",
            },
            request=lambda params: HttpCall(path=_messages_path(params), params={"limit": 10}),
            extract=_channel_messages,
        ),
    },
)
