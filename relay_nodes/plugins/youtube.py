from relay_nodes.schema import ActionSpec, AuthSpec, Exchange, HttpCall, ProviderSpec


MAX_RESULTS_CAP = 50


def _max_results(params) -> int:
    try:
        value = int(params.get("maxResults") or 10)
    except (TypeError, ValueError):
        value = 10
    return max(1, min(value, MAX_RESULTS_CAP))


def _thumbnail(snippet: dict):
    return ((snippet.get("thumbnails") or {}).get("default") or {}).get("url")


def _search_items(ex: Exchange):
    items = []
    for item in ex.payload.get("items") or []:
        snippet = item.get("snippet") or {}
        items.append({
            "id": (item.get("id") or {}).get("videoId"),
            "title": snippet.get("title"),
            "channelTitle": snippet.get("channelTitle"),
            "publishedAt": snippet.get("publishedAt"),
            "thumbnail": _thumbnail(snippet),
        })
    return {"action": "search_videos", "query": ex.params["query"], "items": items}


def _channel_items(ex: Exchange):
    items = []
    for item in ex.payload.get("items") or []:
        snippet = item.get("snippet") or {}
        items.append({
            "id": (item.get("id") or {}).get("videoId"),
            "title": snippet.get("title"),
            "publishedAt": snippet.get("publishedAt"),
            "thumbnail": _thumbnail(snippet),
        })
    return {"action": "get_channel_videos", "channelId": ex.params["channelId"], "items": items}


PROVIDER = ProviderSpec(
    name="youtube",
    title="YouTube",
    base_url="https://www.googleapis.com/youtube/v3",
    doc="Search public videos or list a channel's latest uploads.",
    auth=AuthSpec(type="bearer", credential="accessToken", message="Access token is required"),
    actions={
        "search_videos": ActionSpec(
            name="search_videos",
            title="Search videos",
            required={"query": "Query is required for search"},
            request=lambda params: HttpCall(
                path="/search",
                params={"part": "snippet", "type": "video", "maxResults": _max_results(params), "q": params["query"]},
            ),
            extract=_search_items,
        ),
        "get_channel_videos": ActionSpec(
            name="get_channel_videos",
            title="Get channel videos",
            required={"channelId": "channelId is required"},
            request=lambda params: HttpCall(
                path="/search",
                params={
                    "part": "snippet",
                    "channelId": params["channelId"],
                    "order": "date",
                    "type": "video",
                    "maxResults": _max_results(params),
                },
            ),
            extract=_channel_items,
        ),
    },
)
