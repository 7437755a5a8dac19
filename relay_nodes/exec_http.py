import asyncio
from typing import Dict, Any, List, Optional

import httpx

from .errors import MissingField, TransportError, UnsupportedAction, UpstreamError
from .schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_required(required: Dict[str, str], params: Dict[str, Any]) -> None:
    for field, message in required.items():
        if _is_blank(params.get(field)):
            raise MissingField(message)


def validate_request(provider: ProviderSpec, params: Dict[str, Any]) -> ActionSpec:
    """Resolve the action and check every required field. Never touches the network."""
    _check_required({provider.auth.credential: provider.auth.message}, params)
    _check_required(provider.required, params)
    action = provider_action(provider, params.get(provider.action_field))
    if action.auth and action.auth.credential != provider.auth.credential:
        _check_required({action.auth.credential: action.auth.message}, params)
    _check_required(action.required, params)
    return action


def provider_action(provider: ProviderSpec, name: Any) -> ActionSpec:
    action = provider.actions.get(name) if isinstance(name, str) else None
    if action is None:
        raise UnsupportedAction(f"Unsupported {provider.title} {provider.unsupported_label}: {name}")
    return action


def _apply_auth(auth: AuthSpec, token: str, headers: Dict[str, str], params: Dict[str, Any]) -> None:
    if auth.type == "bearer":
        headers["Authorization"] = f"Bearer {token}"
    elif auth.type == "bot":
        headers["Authorization"] = f"Bot {token}"
    elif auth.type == "header":
        headers[auth.name] = token  # type: ignore[index]
    elif auth.type == "query":
        params[auth.name] = token  # type: ignore[index]


def build_request(provider: ProviderSpec, action: ActionSpec, call: HttpCall, params: Dict[str, Any]):
    auth = action.auth or provider.auth
    url = call.path if call.path.startswith("http") else provider.base_url + call.path
    headers = {**provider.headers, **call.headers}
    q_params = dict(call.params)
    _apply_auth(auth, params[auth.credential], headers, q_params)
    return call.method, url, q_params, headers, call.json_body, call.content


def _dig(body: Any, path: str) -> Any:
    current = body
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def upstream_error(provider: ProviderSpec, action: ActionSpec, response: httpx.Response) -> UpstreamError:
    status = response.status_code
    message = {**provider.status_hints, **action.status_hints}.get(status)
    if not message:
        try:
            body = response.json()
        except ValueError:
            body = None
        for field in provider.error_fields:
            found = _dig(body, field)
            if isinstance(found, str) and found:
                message = found
                break
    if not message:
        message = response.reason_phrase or f"HTTP {status}"
    return UpstreamError(f"{provider.title} API error: {message}", status)


async def _send(provider: ProviderSpec, action: ActionSpec, call: HttpCall, params: Dict[str, Any], ctx) -> httpx.Response:
    method, url, q_params, headers, body, content = build_request(provider, action, call, params)
    ctx.log.debug("%s %s -> %s %s", provider.qualified(action.name), method, url, sorted(q_params))
    try:
        return await ctx.http.request(
            method,
            url,
            params=q_params or None,
            headers=headers,
            json=body,
            content=content,
        )
    except httpx.HTTPError as e:
        raise TransportError(f"{provider.title} API request failed: {e}") from e


def _json(provider: ProviderSpec, response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise TransportError(f"{provider.title} API returned an unreadable response") from e


async def _run_follow_ups(provider: ProviderSpec, action: ActionSpec, calls: List[HttpCall], params: Dict[str, Any], ctx) -> List[Any]:
    if action.follow_up_strict:
        out: List[Any] = []
        for call in calls:
            r = await _send(provider, action, call, params, ctx)
            if not r.is_success:
                raise upstream_error(provider, action, r)
            out.append(_json(provider, r))
        return out

    # Lenient follow-ups: a failed call leaves a None in its slot
    responses = await asyncio.gather(
        *(_send(provider, action, call, params, ctx) for call in calls),
        return_exceptions=True,
    )
    out = []
    for r in responses:
        payload: Optional[Any] = None
        if isinstance(r, httpx.Response) and r.is_success:
            try:
                payload = _json(provider, r)
            except TransportError:
                payload = None
        elif isinstance(r, BaseException) and not isinstance(r, TransportError):
            raise r
        out.append(payload)
    return out


async def exec_action(provider: ProviderSpec, params: Dict[str, Any], ctx) -> Dict[str, Any]:
    action = validate_request(provider, params)
    call = action.request(params)
    r = await _send(provider, action, call, params, ctx)
    if not r.is_success:
        raise upstream_error(provider, action, r)
    payload = _json(provider, r)

    follow_ups: List[Any] = []
    if action.follow_up:
        follow_ups = await _run_follow_ups(provider, action, action.follow_up(params, payload), params, ctx)

    return action.extract(
        Exchange(params=params, payload=payload, follow_ups=follow_ups, timestamp=ctx.now())
    )
