"""Inbound push notifications from GitHub, Gmail and YouTube.

Receivers log what arrived and acknowledge it. Nothing downstream is triggered.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any


log = logging.getLogger("relay.webhooks")


class SignatureMismatch(Exception):
	...


class VerificationFailed(Exception):
	...


def github_signature(secret: str, body: bytes) -> str:
	return "sha256=" + hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_github_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
	"""Check `x-hub-signature-256` against the raw body.

	Returns True when verified and False when there was nothing to verify with
	(no secret configured or no header sent); such deliveries are still processed.
	Raises SignatureMismatch when both are present and disagree.
	"""
	if not secret or not signature:
		return False
	if not hmac.compare_digest(signature.encode("utf-8"), github_signature(secret, body).encode("utf-8")):
		raise SignatureMismatch("Invalid signature")
	return True


def handle_github_event(event: str | None, data: dict[str, Any]) -> dict[str, Any]:
	action = data.get("action")
	repository = (data.get("repository") or {}).get("full_name")

	if event == "issues" and action == "opened":
		issue = data["issue"]
		log.info(
			"New GitHub issue created: #%s %r in %s by %s at %s",
			issue["number"], issue["title"], repository, issue["user"]["login"], issue.get("created_at"),
		)
		return {"success": True, "message": "GitHub issue webhook processed", "triggered": True}

	if event == "push":
		log.info(
			"GitHub push event: %s, %d commits by %s on %s",
			repository, len(data.get("commits") or []), (data.get("pusher") or {}).get("name"), data.get("ref"),
		)
		return {"success": True, "message": "GitHub push webhook processed"}

	if event == "pull_request" and action == "opened":
		pr = data["pull_request"]
		log.info("New GitHub PR created: #%s %r in %s by %s", pr["number"], pr["title"], repository, pr["user"]["login"])
		return {"success": True, "message": "GitHub PR webhook processed"}

	if event not in ("issues", "pull_request"):
		log.info("Unhandled GitHub event: %s", event)
	return {"success": True, "message": "GitHub webhook received"}


def handle_gmail_notification(body: dict[str, Any], verification_token: str | None) -> dict[str, Any]:
	kind = body.get("type")
	if kind == "verification":
		token = body.get("token")
		if not verification_token or not isinstance(token, str) or not hmac.compare_digest(token.encode("utf-8"), verification_token.encode("utf-8")):
			raise VerificationFailed("Invalid verification token")
		return {"success": True}

	if kind == "new_email":
		email = body["emailData"]
		log.info("New Gmail received: from=%s subject=%r", email.get("from"), email.get("subject"))
		return {"success": True, "message": "Gmail webhook processed", "triggered": True}

	return {"success": True, "message": "Webhook received"}


def handle_youtube_notification(body: dict[str, Any]) -> dict[str, Any]:
	kind = body.get("type")
	if kind == "video_uploaded":
		video = body["videoData"]
		log.info(
			"New YouTube video uploaded: %s %r on %s (%s) at %s",
			video.get("videoId"), video.get("title"), video.get("channelId"), video.get("channelTitle"), video.get("publishedAt"),
		)
		return {"success": True, "message": "YouTube webhook processed", "triggered": True}

	if kind == "channel_update":
		channel = body["channelData"]
		log.info("YouTube channel updated: %s %r", channel.get("channelId"), channel.get("title"))
		return {"success": True, "message": "YouTube channel webhook processed"}

	return {"success": True, "message": "YouTube webhook received"}
