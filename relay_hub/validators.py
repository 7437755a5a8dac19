"""Shape checks for credentials typed into node forms.

These only catch obvious paste mistakes before a request leaves the browser
session. Passing one says nothing about whether the provider will accept the token.
"""
from __future__ import annotations


AI_KEY_PREFIXES = {
	"openai": "sk-",
	"anthropic": "sk-ant-",
	"google": "AIza",
	"groq": "gsk_",
}


def _has_whitespace(token: str) -> bool:
	return any(ch.isspace() for ch in token)


def validate_access_token(token: str | None) -> bool:
	"""Google OAuth access token (Gmail, Drive, YouTube)."""
	if not token:
		return False
	return len(token) > 10 and "ya29." in token


validate_youtube_access_token = validate_access_token


def validate_discord_token(token: str | None) -> bool:
	if not token:
		return False
	return len(token) > 50 and "." in token


def validate_twitter_token(token: str | None) -> bool:
	if not token:
		return False
	return len(token) >= 50 and not _has_whitespace(token)


def validate_linkedin_token(token: str | None) -> bool:
	if not token:
		return False
	return len(token) > 20 and not _has_whitespace(token)


def validate_ai_token(token: str | None, provider: str | None) -> bool:
	if not token or len(token) <= 10:
		return False
	prefix = AI_KEY_PREFIXES.get(provider or "")
	if prefix is None:
		return False
	return token.startswith(prefix)
