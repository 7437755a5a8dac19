import json
import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from relay_hub.config import get_settings
from relay_hub.webhooks import (
    SignatureMismatch,
    VerificationFailed,
    handle_github_event,
    handle_gmail_notification,
    handle_youtube_notification,
    verify_github_signature,
)


router = APIRouter(prefix="/api/webhooks")

log = logging.getLogger("relay.webhooks")


def _failed(source: str) -> JSONResponse:
    log.exception("%s webhook error", source)
    return JSONResponse({"success": False, "error": "Webhook processing failed"}, status_code=500)


@router.post("/github")
async def github_webhook(request: Request):
    body = await request.body()
    signature = request.headers.get("x-hub-signature-256")
    event = request.headers.get("x-github-event")
    try:
        verified = verify_github_signature(get_settings().github_webhook_secret, body, signature)
    except SignatureMismatch:
        log.warning("GitHub webhook rejected: signature mismatch (event=%s)", event)
        return JSONResponse({"error": "Invalid signature"}, status_code=403)
    if not verified:
        log.info("GitHub webhook accepted without signature check (event=%s)", event)
    try:
        return handle_github_event(event, json.loads(body))
    except (ValueError, KeyError, TypeError, AttributeError):
        return _failed("GitHub")


@router.get("/github")
async def github_webhook_info():
    return {"message": "GitHub webhook endpoint"}


@router.post("/gmail")
async def gmail_webhook(request: Request):
    try:
        body = await request.json()
        return handle_gmail_notification(body, get_settings().gmail_verification_token)
    except VerificationFailed as e:
        return JSONResponse({"error": str(e)}, status_code=403)
    except (ValueError, KeyError, TypeError, AttributeError):
        return _failed("Gmail")


@router.get("/gmail")
async def gmail_webhook_info(challenge: Optional[str] = None):
    if challenge:
        return PlainTextResponse(challenge)
    return {"message": "Gmail webhook endpoint"}


@router.post("/youtube")
async def youtube_webhook(request: Request):
    try:
        body = await request.json()
        return handle_youtube_notification(body)
    except (ValueError, KeyError, TypeError, AttributeError):
        return _failed("YouTube")


@router.get("/youtube")
async def youtube_webhook_info(challenge: Optional[str] = None):
    if challenge:
        return PlainTextResponse(challenge)
    return {"message": "YouTube webhook endpoint"}
