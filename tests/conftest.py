"""Shared test fixtures and configuration."""

import json

import pytest
from unittest.mock import MagicMock

from reddit_researcher.researcher import RedditResearcher
from reddit_researcher.utils.config import ResearcherConfig
from reddit_researcher.utils.rate_limit import RateLimiter
from reddit_researcher.utils.reddit_client import RedditClient


def make_response(status=200, payload=None, text=None):
    """Create a mock requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.text = text if text is not None else json.dumps(payload if payload is not None else {})
    return resp


def make_post(post_id, **overrides):
    """Create a t3 listing child."""
    data = {
        "id": post_id,
        "title": f"Post {post_id}",
        "selftext": "Looking for an inventory app that syncs with Shopify.",
        "score": 12,
        "num_comments": 4,
        "permalink": f"/r/shopify/comments/{post_id}/post_{post_id}/",
        "created_utc": 1705312200.0,
        "subreddit": "shopify",
        "url": f"https://www.reddit.com/r/shopify/comments/{post_id}/post_{post_id}/",
    }
    data.update(overrides)
    return {"kind": "t3", "data": data}


def make_comment(comment_id, replies=None, **overrides):
    """Create a t1 comment node with optional nested replies."""
    data = {
        "id": comment_id,
        "author": f"user_{comment_id}",
        "body": f"Comment {comment_id}",
        "score": 3,
        "created_utc": 1705315800.0,
        # Reddit sends "" when a comment has no replies
        "replies": make_listing(replies) if replies else "",
    }
    data.update(overrides)
    return {"kind": "t1", "data": data}


def make_listing(children):
    return {"kind": "Listing", "data": {"after": None, "children": list(children)}}


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def post_child():
    return make_post


@pytest.fixture
def comment_node():
    return make_comment


@pytest.fixture
def listing():
    return make_listing


@pytest.fixture
def sleeps():
    """Collects every sleep duration instead of sleeping."""
    return []


@pytest.fixture
def config():
    return ResearcherConfig()


@pytest.fixture
def client(config, sleeps):
    """A RedditClient that never sleeps and has no jitter."""
    client = RedditClient(config, sleep=sleeps.append, jitter=lambda low, high: 0)
    client.session.get = MagicMock()
    return client


@pytest.fixture
def pauses():
    return []


@pytest.fixture
def limiter(pauses):
    return RateLimiter(delay=2.0, jitter=0.5, sleep=pauses.append, rand=lambda low, high: 0)


@pytest.fixture
def researcher(client, limiter, config):
    return RedditResearcher(client=client, limiter=limiter, config=config)


@pytest.fixture
def thread_payload():
    """Comments response: [post listing, comments listing]."""
    post = make_post("abc123", title="Best inventory app?")
    comments = [
        make_comment("c1", replies=[make_comment("c1r1", replies=[make_comment("c1r1r1")])]),
        make_comment("c2"),
        {"kind": "more", "data": {"count": 7, "children": ["x1", "x2"]}},
    ]
    return [make_listing([post]), make_listing(comments)]
