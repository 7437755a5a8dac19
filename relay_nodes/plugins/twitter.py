from urllib.parse import quote

from relay_nodes.errors import UpstreamError
from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


DEFAULT_COUNT = 10


def _count(params) -> int:
    # recent search and user timelines both reject max_results outside 10..100
    try:
        count = int(params.get("count") or DEFAULT_COUNT)
    except (TypeError, ValueError):
        count = DEFAULT_COUNT
    return max(10, min(count, 100))


def _recent_search(query: str):
    def request(params):
        return HttpCall(path="/tweets/search/recent", params={"query": query, "max_results": _count(params)})
    return request


def _tweets(ex: Exchange):
    tweets = ex.payload.get("data") or []
    return {
        "action": ex.params["action"],
        "tweets": tweets,
        "count": len(tweets),
        "retrievedAt": ex.timestamp,
    }


def _user_timeline(params, payload):
    # unknown usernames come back as 200 with an "errors" list and no data
    user = (payload or {}).get("data")
    if not user:
        errors = (payload or {}).get("errors") or [{}]
        detail = errors[0].get("detail") or f"User '{params['username']}' not found"
        raise UpstreamError(f"Twitter API error: {detail}", 404)
    user_id = user["id"]
    return [HttpCall(path=f"/users/{quote(str(user_id), safe='')}/tweets", params={"max_results": _count(params)})]


def _user_tweets(ex: Exchange):
    tweets = (ex.follow_ups[0] or {}).get("data") or []
    return {
        "action": "user_tweets",
        "username": ex.params["username"],
        "userId": ex.payload["data"]["id"],
        "tweets": tweets,
        "count": len(tweets),
        "retrievedAt": ex.timestamp,
    }


PROVIDER = ProviderSpec(
    name="twitter",
    title="Twitter",
    base_url="https://api.twitter.com/2",
    doc="Read recent tweets with an app bearer token.",
    auth=AuthSpec(type="bearer", credential="bearerToken", message="Bearer token is required"),
    error_fields=["detail", "title"],
    actions={
        "get_timeline": ActionSpec(
            name="get_timeline",
            title="Get timeline",
            request=_recent_search("from:followed_user"),
            extract=_tweets,
        ),
        "get_trending": ActionSpec(
            name="get_trending",
            title="Get trending",
            request=_recent_search("trending"),
            extract=_tweets,
        ),
        "get_user_tweets": ActionSpec(
            name="get_user_tweets",
            title="Get user tweets",
            required={"username": "Username is required for user tweets"},
            request=lambda params: HttpCall(path=f"/users/by/username/{quote(str(params['username']), safe='')}"),
            follow_up=_user_timeline,
            extract=_user_tweets,
        ),
    },
)
