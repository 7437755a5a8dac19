from __future__ import annotations

import logging
from typing import Callable

import httpx

from relay_nodes.schema import ActionResult

from .models import (
	ActionRequest,
	AIConfig,
	DiscordConfig,
	GmailConfig,
	GoogleDriveConfig,
	LinkedInConfig,
	NodeRequest,
	TwitterConfig,
	YouTubeConfig,
)
from .validators import (
	validate_access_token,
	validate_ai_token,
	validate_discord_token,
	validate_linkedin_token,
	validate_twitter_token,
	validate_youtube_access_token,
)


log = logging.getLogger("relay.client")


def _credential_check(request: NodeRequest) -> str | None:
	"""Return an error message when the request's credential is missing or malformed."""
	checks: dict[str, tuple[str, Callable[[str], bool], str]] = {
		"gmail": ("access_token", validate_access_token, "Invalid access token format"),
		"drive": ("access_token", validate_access_token, "Invalid access token format"),
		"discord": ("bot_token", validate_discord_token, "Invalid Discord bot token format"),
		"twitter": ("bearer_token", validate_twitter_token, "Invalid Twitter bearer token format"),
		"youtube": ("access_token", validate_youtube_access_token, "Invalid Google access token format"),
		"linkedin": ("access_token", validate_linkedin_token, "Invalid LinkedIn access token format"),
	}
	if isinstance(request, AIConfig):
		if not request.api_key:
			return "API key is required"
		if not validate_ai_token(request.api_key, request.provider):
			return "Invalid API key format"
		return None
	attr, check, message = checks[request.kind]  # type: ignore[attr-defined]
	token = getattr(request, attr)
	if not token:
		return "Access token is required" if attr == "access_token" else f"{attr.replace('_', ' ').capitalize()} is required"
	if not check(token):
		return message
	return None


class ProxyClient:
	"""Calls the proxy endpoints on behalf of a canvas node.

	Every method returns an `ActionResult`; nothing raised by the transport or by
	decoding the reply escapes to the caller.
	"""

	def __init__(self, base_url: str, http: httpx.AsyncClient | None = None, timeout: float = 60.0):
		self.base_url = base_url.rstrip("/")
		self.http = http
		self.timeout = timeout

	async def _post(self, path: str, payload: dict) -> httpx.Response:
		url = self.base_url + path
		if self.http is not None:
			return await self.http.post(url, json=payload)
		async with httpx.AsyncClient(timeout=self.timeout) as http:
			return await http.post(url, json=payload)

	async def invoke(self, request: ActionRequest) -> ActionResult:
		problem = _credential_check(request)
		if problem:
			return ActionResult.failure(problem)
		try:
			r = await self._post(f"/api/{request.kind}", request.payload())
			result = ActionResult.model_validate(r.json())
		except Exception as e:
			log.exception("%s proxy call failed", request.kind)
			return ActionResult.failure(str(e) or e.__class__.__name__, 500)
		result.status_code = r.status_code
		return result

	async def send_gmail_email(self, config: GmailConfig) -> ActionResult:
		return await self.invoke(config)

	async def execute_google_drive_action(self, config: GoogleDriveConfig) -> ActionResult:
		return await self.invoke(config)

	async def send_discord_message(self, config: DiscordConfig) -> ActionResult:
		return await self.invoke(config)

	async def get_twitter_data(self, config: TwitterConfig) -> ActionResult:
		return await self.invoke(config)

	async def execute_youtube_action(self, config: YouTubeConfig) -> ActionResult:
		return await self.invoke(config)

	async def execute_linkedin_action(self, config: LinkedInConfig) -> ActionResult:
		return await self.invoke(config)

	async def execute_ai_action(self, config: AIConfig) -> ActionResult:
		return await self.invoke(config)
