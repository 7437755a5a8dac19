import base64
from urllib.parse import quote
from typing import Any, Dict, List, Optional

from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


DETAIL_LIMIT = 5


def _raw_message(params: Dict[str, Any]) -> str:
    email = "\n".join([f"To: {params['recipient']}", f"Subject: {params['subject']}", "", str(params["message"])])
    return base64.urlsafe_b64encode(email.encode("utf-8")).decode("ascii")


def _header(detail: dict, name: str) -> Optional[str]:
    for h in (detail.get("payload") or {}).get("headers") or []:
        if h.get("name") == name:
            return h.get("value")
    return None


def _summaries(ex: Exchange) -> List[dict]:
    out = []
    for detail in ex.follow_ups:
        if not isinstance(detail, dict):
            continue
        out.append({
            "id": detail.get("id"),
            "subject": _header(detail, "Subject") or "No Subject",
            "from": _header(detail, "From") or "Unknown",
            "date": _header(detail, "Date") or ex.timestamp,
            "snippet": detail.get("snippet") or "No content",
        })
    return out


def _message_details(params, payload) -> List[HttpCall]:
    messages = (payload or {}).get("messages") or []
    return [HttpCall(path=f"/messages/{quote(str(m['id']), safe='')}") for m in messages[:DETAIL_LIMIT]]


def _send(params):
    return HttpCall(method="POST", path="/messages/send", json_body={"raw": _raw_message(params)})


def _sent(ex: Exchange):
    return {
        "messageId": ex.payload.get("id"),
        "recipient": ex.params["recipient"],
        "subject": ex.params["subject"],
        "sentAt": ex.timestamp,
    }


def _search(params):
    return HttpCall(path="/messages", params={"q": params["searchQuery"], "maxResults": 10})


PROVIDER = ProviderSpec(
    name="gmail",
    title="Gmail",
    base_url="https://gmail.googleapis.com/gmail/v1/users/me",
    doc="Send, read and search mail of the authorised Google account.",
    auth=AuthSpec(type="bearer", credential="accessToken", message="Access token is required"),
    actions={
        "send": ActionSpec(
            name="send",
            title="Send email",
            required={
                "recipient": "Recipient, subject, and message are required for sending emails",
                "subject": "Recipient, subject, and message are required for sending emails",
                "message": "Recipient, subject, and message are required for sending emails",
            },
            request=_send,
            extract=_sent,
        ),
        "read": ActionSpec(
            name="read",
            title="Read latest emails",
            request=lambda params: HttpCall(path="/messages", params={"maxResults": 10}),
            follow_up=_message_details,
            follow_up_strict=False,
            extract=lambda ex: {"emails": _summaries(ex)},
        ),
        "search": ActionSpec(
            name="search",
            title="Search emails",
            required={"searchQuery": "Search query is required for search action"},
            request=_search,
            follow_up=_message_details,
            follow_up_strict=False,
            extract=lambda ex: {"query": ex.params["searchQuery"], "results": _summaries(ex)},
        ),
    },
)
