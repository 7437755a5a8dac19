"""
ProxyClient talking to the real app in-process, with the providers mocked behind it.
"""

import httpx
import pytest

from hub.api_nodes import get_http_client
from relay_hub.client import ProxyClient
from relay_hub.models import AIConfig, DiscordConfig, GmailConfig, GoogleDriveConfig, LinkedInConfig, TwitterConfig, YouTubeConfig
from webapp import app

from conftest import DISCORD_TOKEN, FIXED_NOW, GOOGLE_TOKEN, LINKEDIN_TOKEN, OPENAI_KEY, TWITTER_TOKEN


class Recorder:
    """Transport that refuses to send anything and remembers that it was asked."""

    def __init__(self):
        self.calls = 0

    def handler(self, request):
        self.calls += 1
        return httpx.Response(500)


@pytest.fixture
def proxy(upstream):
    async def _upstream_http():
        async with upstream.client() as http:
            yield http

    app.dependency_overrides[get_http_client] = _upstream_http
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
    try:
        yield ProxyClient("http://relay.test", http=http)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def offline():
    recorder = Recorder()
    client = ProxyClient("http://relay.test", http=httpx.AsyncClient(transport=httpx.MockTransport(recorder.handler)))
    return client, recorder


@pytest.mark.asyncio
@pytest.mark.parametrize("config,error", [
    (GmailConfig(action="read"), "Access token is required"),
    (GmailConfig(action="read", access_token="not-a-google-token"), "Invalid access token format"),
    (GoogleDriveConfig(access_token="short"), "Invalid access token format"),
    (DiscordConfig(channel_id="1", message="x"), "Bot token is required"),
    (DiscordConfig(channel_id="1", message="x", bot_token="abc.def"), "Invalid Discord bot token format"),
    (TwitterConfig(), "Bearer token is required"),
    (TwitterConfig(bearer_token="has a space " * 10), "Invalid Twitter bearer token format"),
    (YouTubeConfig(query="x", access_token="EAAB" + "x" * 40), "Invalid Google access token format"),
    (LinkedInConfig(author_urn="urn:li:person:1", text="t", access_token="tiny"), "Invalid LinkedIn access token format"),
    (AIConfig(prompt="p", model="m"), "API key is required"),
    (AIConfig(provider="anthropic", prompt="p", model="m", api_key=OPENAI_KEY), "Invalid API key format"),
])
async def test_bad_credentials_never_leave_the_client(offline, config, error):
    client, recorder = offline

    result = await client.invoke(config)

    assert result.success is False
    assert result.error == error
    assert result.status_code == 400
    assert recorder.calls == 0


@pytest.mark.asyncio
async def test_gmail_send_round_trip(proxy, upstream):
    upstream.on("POST", "/gmail/v1/users/me/messages/send", json={"id": "m-9"})

    result = await proxy.send_gmail_email(GmailConfig(
        action="send", recipient="ada@example.com", subject="Hi", message="Body", access_token=GOOGLE_TOKEN,
    ))

    assert result.success is True
    assert result.status_code == 200
    assert result.data["messageId"] == "m-9"
    assert result.data["recipient"] == "ada@example.com"


@pytest.mark.asyncio
async def test_configs_are_sent_in_camel_case(proxy, upstream):
    upstream.on("POST", "/api/v10/channels/77/messages", json={"id": "5"})

    result = await proxy.send_discord_message(DiscordConfig(
        action="send_embed", channel_id="77", message="m", embed_title="T", embed_description="D", bot_token=DISCORD_TOKEN,
    ))

    assert result.success is True
    assert result.data["embedTitle"] == "T"


@pytest.mark.asyncio
async def test_proxy_failure_keeps_status_and_message(proxy, upstream):
    upstream.on("GET", "/2/tweets/search/recent", status=401, json={"title": "Unauthorized", "detail": "Unauthorized"})

    result = await proxy.get_twitter_data(TwitterConfig(action="get_trending", bearer_token=TWITTER_TOKEN))

    assert result.success is False
    assert result.status_code == 401
    assert result.error == "Twitter API error: Unauthorized"


@pytest.mark.asyncio
async def test_missing_action_field_is_reported_by_proxy(proxy, upstream):
    result = await proxy.execute_google_drive_action(GoogleDriveConfig(action="upload", access_token=GOOGLE_TOKEN))

    assert result.status_code == 400
    assert result.error == "File name is required for upload"
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_youtube_linkedin_and_ai_methods(proxy, upstream):
    upstream.on("GET", "/youtube/v3/search", json={"items": []})
    upstream.on("GET", "/v2/ugcPosts", json={"elements": []})
    upstream.on("POST", "/v1/chat/completions", json={"choices": [{"message": {"content": "ok"}}]})

    yt = await proxy.execute_youtube_action(YouTubeConfig(query="q", access_token=GOOGLE_TOKEN))
    li = await proxy.execute_linkedin_action(LinkedInConfig(action="get_profile_posts", author_urn="urn:li:person:1", access_token=LINKEDIN_TOKEN))
    ai = await proxy.execute_ai_action(AIConfig(prompt="p", model="gpt-4o-mini", api_key=OPENAI_KEY))

    assert yt.data == {"action": "search_videos", "query": "q", "items": []}
    assert li.data == {"action": "get_profile_posts", "result": {"elements": []}}
    assert ai.data["response"] == "ok"
    assert ai.data["timestamp"] != FIXED_NOW


@pytest.mark.asyncio
async def test_transport_failure_becomes_failed_result():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ProxyClient("http://relay.test", http=httpx.AsyncClient(transport=httpx.MockTransport(refuse)))

    result = await client.invoke(GmailConfig(action="read", access_token=GOOGLE_TOKEN))

    assert result.success is False
    assert result.status_code == 500
    assert result.error == "connection refused"


@pytest.mark.asyncio
async def test_malformed_proxy_url_becomes_failed_result():
    client = ProxyClient("http://[::1")

    result = await client.invoke(GmailConfig(action="read", access_token=GOOGLE_TOKEN))

    assert result.success is False
    assert result.status_code == 500
    assert result.error


@pytest.mark.asyncio
async def test_non_json_reply_becomes_failed_result():
    client = ProxyClient(
        "http://relay.test",
        http=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))),
    )

    result = await client.invoke(GmailConfig(action="read", access_token=GOOGLE_TOKEN))

    assert result.success is False
    assert result.status_code == 500
