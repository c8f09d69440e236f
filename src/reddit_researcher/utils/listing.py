"""Reduce Reddit listing JSON to flat post and comment records."""

import re
from dataclasses import asdict, dataclass
from typing import Any, Optional

REDDIT_URL = "https://reddit.com"
SELFTEXT_LIMIT = 500
BODY_LIMIT = 1000

REDDIT_DOMAIN_RE = re.compile(
    r"^(?:https?://)?(?:www\.|old\.)?reddit\.com", re.IGNORECASE
)


@dataclass(frozen=True)
class Post:
    """A search hit or the head post of a comment thread"""
    id: Optional[str]
    title: Optional[str]
    selftext: str
    score: Optional[int]
    num_comments: Optional[int]
    permalink: str
    created_utc: Optional[float]
    subreddit: Optional[str]
    url: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Comment:
    """A single comment from a flattened reply tree"""
    id: Optional[str]
    author: Optional[str]
    body: str
    score: Optional[int]
    created_utc: Optional[float]
    depth: int

    def to_dict(self) -> dict:
        return asdict(self)


def _data(node: Any) -> dict:
    """Return node['data'] when it is a dict, else an empty dict."""
    if isinstance(node, dict):
        data = node.get("data")
        if isinstance(data, dict):
            return data
    return {}


def listing_children(node: Any) -> list[dict]:
    """Return the children of a Listing node; [] for anything malformed."""
    children = _data(node).get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def absolute_reddit_url(path_or_url: Optional[str]) -> str:
    """Convert Reddit path to absolute URL if needed."""
    if not path_or_url:
        return ""
    if path_or_url.startswith("http://") or path_or_url.startswith("https://"):
        return path_or_url
    if not path_or_url.startswith("/"):
        path_or_url = "/" + path_or_url
    return f"{REDDIT_URL}{path_or_url}"


def normalize_subreddit(name: str) -> str:
    """Normalize subreddit input to bare name."""
    value = name.strip().strip("/")
    if value.lower().startswith("r/"):
        value = value[2:]
    return value


def post_path(url: str) -> str:
    """Turn any Reddit post URL into a site-relative path.

    Query string and trailing slash are dropped, along with the
    reddit.com host (www. and old. included).
    """
    path = url.strip().split("?")[0].split("#")[0].rstrip("/")
    path = REDDIT_DOMAIN_RE.sub("", path)
    if not path.startswith("/"):
        path = "/" + path
    return path


def extract_post(child: dict) -> Post:
    """Map a listing child (kind t3) to a Post. Never fails."""
    d = _data(child)
    return Post(
        id=d.get("id"),
        title=d.get("title"),
        selftext=(d.get("selftext") or "")[:SELFTEXT_LIMIT],
        score=d.get("score"),
        num_comments=d.get("num_comments"),
        permalink=absolute_reddit_url(d.get("permalink")),
        created_utc=d.get("created_utc"),
        subreddit=d.get("subreddit"),
        url=d.get("url"),
    )


def flatten_comments(
    children: list,
    depth: int = 0,
    max_depth: int = 2,
) -> list[Comment]:
    """Flatten a comment tree, each comment before its replies.

    Replies nested ``max_depth`` levels or deeper are dropped.
    """
    results = []
    for child in children:
        if not isinstance(child, dict) or child.get("kind") != "t1":
            continue

        d = _data(child)
        results.append(
            Comment(
                id=d.get("id"),
                author=d.get("author"),
                body=(d.get("body") or "")[:BODY_LIMIT],
                score=d.get("score"),
                created_utc=d.get("created_utc"),
                depth=depth,
            )
        )

        if depth < max_depth - 1:
            # "replies" is an empty string when there are none
            reply_children = listing_children(d.get("replies"))
            if reply_children:
                results.extend(
                    flatten_comments(reply_children, depth + 1, max_depth)
                )

    return results


def parse_thread(payload: Any) -> tuple[Optional[dict], list[dict]]:
    """Split a comments response into (post child, comment children).

    Reddit answers /comments/ with ``[post_listing, comments_listing]``.
    A missing post (e.g. deleted) comes back as None.
    """
    if not isinstance(payload, list):
        return None, []

    post_children = listing_children(payload[0]) if len(payload) > 0 else []
    comment_children = listing_children(payload[1]) if len(payload) > 1 else []
    post = post_children[0] if post_children else None
    return post, comment_children
