from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NodeRequest(BaseModel):
	"""Common base for the per-provider forms a canvas node is configured with.

	Field names are snake_case in Python and camelCase on the wire, matching
	what the proxy endpoints read from the JSON body.
	"""

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	def payload(self) -> dict[str, Any]:
		return self.model_dump(by_alias=True, exclude_none=True, exclude={"kind"})

	@property
	def action_label(self) -> str:
		return getattr(self, "action")


class GmailConfig(NodeRequest):
	kind: Literal["gmail"] = "gmail"
	action: Literal["send", "read", "search"] = "send"
	recipient: Optional[str] = None
	subject: Optional[str] = None
	message: Optional[str] = None
	search_query: Optional[str] = None
	access_token: str = ""


class GoogleDriveConfig(NodeRequest):
	kind: Literal["drive"] = "drive"
	action: Literal["upload", "download", "list", "search", "create_folder"] = "list"
	file_name: Optional[str] = None
	file_content: Optional[str] = None
	folder_id: Optional[str] = None
	search_query: Optional[str] = None
	access_token: str = ""


class DiscordConfig(NodeRequest):
	kind: Literal["discord"] = "discord"
	action: Literal["send_message", "send_embed", "get_channel_messages"] = "send_message"
	channel_id: Optional[str] = None
	message: Optional[str] = None
	embed_title: Optional[str] = None
	embed_description: Optional[str] = None
	embed_color: Optional[str] = None
	bot_token: str = ""


class TwitterConfig(NodeRequest):
	kind: Literal["twitter"] = "twitter"
	action: Literal["get_timeline", "get_trending", "get_user_tweets"] = "get_timeline"
	username: Optional[str] = None
	count: Optional[int] = None
	bearer_token: str = ""


class YouTubeConfig(NodeRequest):
	kind: Literal["youtube"] = "youtube"
	action: Literal["search_videos", "get_channel_videos"] = "search_videos"
	query: Optional[str] = None
	channel_id: Optional[str] = None
	max_results: Optional[int] = None
	access_token: str = ""


class LinkedInConfig(NodeRequest):
	kind: Literal["linkedin"] = "linkedin"
	action: Literal["create_post", "get_profile_posts"] = "create_post"
	author_urn: Optional[str] = None
	text: Optional[str] = None
	access_token: str = ""


class AIConfig(NodeRequest):
	kind: Literal["ai"] = "ai"
	provider: Literal["openai", "anthropic", "google", "groq"] = "openai"
	model: str = ""
	prompt: str = ""
	max_tokens: Optional[int] = None
	temperature: Optional[float] = None
	api_key: str = ""

	@property
	def action_label(self) -> str:
		return self.provider


ActionRequest = Annotated[
	Union[GmailConfig, GoogleDriveConfig, DiscordConfig, TwitterConfig, YouTubeConfig, LinkedInConfig, AIConfig],
	Field(discriminator="kind"),
]

PROVIDER_TITLES = {
	"gmail": "Gmail",
	"drive": "Google Drive",
	"discord": "Discord",
	"twitter": "Twitter",
	"youtube": "YouTube",
	"linkedin": "LinkedIn",
	"ai": "AI",
}
