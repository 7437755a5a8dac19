from typing import Any, Dict
from urllib.parse import quote

from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7
NO_RESPONSE = "No response"


def _sampling(params: Dict[str, Any]):
    max_tokens = params.get("maxTokens")
    temperature = params.get("temperature")
    return (
        DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
        DEFAULT_TEMPERATURE if temperature is None else temperature,
    )


def _chat_completion(url: str):
    def request(params):
        max_tokens, temperature = _sampling(params)
        return HttpCall(
            method="POST",
            path=url,
            json_body={
                "model": params["model"],
                "messages": [{"role": "user", "content": params["prompt"]}],
                "max_tokens": max_tokens,
                "temperature": temperature,
            },
        )
    return request


def _anthropic_messages(params):
    max_tokens, temperature = _sampling(params)
    return HttpCall(
        method="POST",
        path="https://api.anthropic.com/v1/messages",
        headers={"anthropic-version": "2023-06-01"},
        json_body={
            "model": params["model"],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": params["prompt"]}],
        },
    )


def _gemini_generate(params):
    max_tokens, temperature = _sampling(params)
    return HttpCall(
        method="POST",
        path=f"https://generativelanguage.googleapis.com/v1beta/models/{quote(str(params['model']), safe='')}:generateContent",
        json_body={
            "contents": [{"parts": [{"text": params["prompt"]}]}],
            "generationConfig": {"maxOutputTokens": max_tokens, "temperature": temperature},
        },
    )


def _first(items, *path):
    current: Any = items
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
    return current


def _completion(text_path):
    def extract(ex: Exchange):
        return {
            "provider": ex.params["provider"],
            "model": ex.params["model"],
            "prompt": ex.params["prompt"],
            "response": _first(ex.payload, *text_path) or NO_RESPONSE,
            "usage": ex.payload.get("usage") or {},
            "timestamp": ex.timestamp,
        }
    return extract


BEARER = AuthSpec(type="bearer", credential="apiKey", message="API key is required")
CHOICES_TEXT = ("choices", 0, "message", "content")

PROVIDER = ProviderSpec(
    name="ai",
    title="AI",
    doc="Single-turn chat completion against a hosted model vendor.",
    auth=BEARER,
    action_field="provider",
    unsupported_label="provider",
    required={"prompt": "Prompt is required", "model": "Model is required"},
    actions={
        "openai": ActionSpec(
            name="openai",
            title="OpenAI chat completion",
            auth=BEARER,
            request=_chat_completion("https://api.openai.com/v1/chat/completions"),
            extract=_completion(CHOICES_TEXT),
        ),
        "anthropic": ActionSpec(
            name="anthropic",
            title="Anthropic message",
            auth=AuthSpec(type="header", name="x-api-key", credential="apiKey", message="API key is required"),
            request=_anthropic_messages,
            extract=_completion(("content", 0, "text")),
        ),
        "google": ActionSpec(
            name="google",
            title="Gemini generate content",
            auth=AuthSpec(type="query", name="key", credential="apiKey", message="API key is required"),
            request=_gemini_generate,
            extract=_completion(("candidates", 0, "content", "parts", 0, "text")),
        ),
        "groq": ActionSpec(
            name="groq",
            title="Groq chat completion",
            auth=BEARER,
            request=_chat_completion("https://api.groq.com/openai/v1/chat/completions"),
            extract=_completion(CHOICES_TEXT),
        ),
    },
)
