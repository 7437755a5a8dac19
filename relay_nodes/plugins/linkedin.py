from urllib.parse import quote

from relay_nodes.schema import ActionSpec, AuthSpec, HttpCall, ProviderSpec


def _ugc_post(params):
    return HttpCall(
        method="POST",
        path="/ugcPosts",
        json_body={
            "author": params["authorUrn"],
            "lifecycleState": "PUBLISHED",
            "specificContent": {
                "com.linkedin.ugc.ShareContent": {
                    "shareCommentary": {"text": params["text"]},
                    "shareMediaCategory": "NONE",
                }
            },
            "visibility": {"com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC"},
        },
    )


def _author_posts(params):
    # Rest.li list syntax: the parentheses must reach LinkedIn unescaped
    urn = quote(str(params["authorUrn"]), safe="")
    return HttpCall(path=f"/ugcPosts?q=authors&authors=List({urn})&sortBy=LAST_MODIFIED&count=10")


PROVIDER = ProviderSpec(
    name="linkedin",
    title="LinkedIn",
    base_url="https://api.linkedin.com/v2",
    doc="Publish UGC posts for a member or organisation and read them back.",
    auth=AuthSpec(type="bearer", credential="accessToken", message="Access token is required"),
    headers={"X-Restli-Protocol-Version": "2.0.0"},
    error_fields=["message"],
    actions={
        "create_post": ActionSpec(
            name="create_post",
            title="Create post",
            required={"authorUrn": "authorUrn and text are required", "text": "authorUrn and text are required"},
            request=_ugc_post,
            extract=lambda ex: {"action": "create_post", "result": ex.payload},
        ),
        "get_profile_posts": ActionSpec(
            name="get_profile_posts",
            title="Get profile posts",
            required={"authorUrn": "authorUrn is required"},
            request=_author_posts,
            extract=lambda ex: {"action": "get_profile_posts", "result": ex.payload},
        ),
    },
)
