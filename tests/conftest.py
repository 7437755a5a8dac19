"""Pytest configuration and fixtures."""

import os

import httpx
import pytest

# Keep settings deterministic before the app is imported
os.environ.setdefault("WORKFLOW_RUN_DELAY", "0")
os.environ.pop("GITHUB_WEBHOOK_SECRET", None)
os.environ.pop("GMAIL_VERIFICATION_TOKEN", None)

from relay_nodes.runtime import Context  # noqa: E402


FIXED_NOW = "2026-01-01T00:00:00.000Z"

GOOGLE_TOKEN = "ya29.a0AfH6SMBexampletoken"
DISCORD_TOKEN = "MTA4NzY1NDMyMTA5ODc2NTQzMg.GhIjKl.abcdefghijklmnopqrstuvwxyz0123456789ABCD"
TWITTER_TOKEN = "AAAAAAAAAAAAAAAAAAAAAMLheAAAAAAA0%2BuSeid%2BULvsea4JtiGRiSDSJSI%3DEUifiRBkKG5E2XzMDjRfl76ZC9Ub0wnz4XsNiRVBChTYbJcE3F"
LINKEDIN_TOKEN = "AQXdSP_W41_UPs5ioT_t8HESyODB4FqbkJ8LrV_5mff4gPODzOYR"
OPENAI_KEY = "sk-proj-abcdefghijklmnop"


class Upstream:
    """Scripted stand-in for every provider API, keyed by request path."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, json=None, text=None, error=None):
        self.routes[(method, path)] = (status, json, text, error)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(599, json={"error": {"message": f"no route for {request.url.path}"}})
        status, json, text, error = route
        if error is not None:
            raise error(f"scripted failure for {request.url.path}", request=request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json if json is not None else {})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def ctx(upstream):
    return Context(http=upstream.client(), clock=lambda: FIXED_NOW)
