"""Command handlers: validate, fetch, extract, aggregate.

Every handler returns an envelope dict ({"ok": True, "data": ...} or
{"ok": False, "error": ...}). Network failures arrive here as data and
never as exceptions, so one bad subreddit cannot sink a batch.
"""

from typing import Any, Dict, Optional

from .utils.config import ResearcherConfig
from .utils.listing import (
    extract_post,
    flatten_comments,
    listing_children,
    normalize_subreddit,
    parse_thread,
    post_path,
)
from .utils.output import error_envelope, log, ok_envelope
from .utils.rate_limit import RateLimiter
from .utils.reddit_client import RedditClient

DEFAULT_SORT = "relevance"
DEFAULT_TIME = "year"

SEARCH_LIMIT = 25
COMMENTS_LIMIT = 50
SEARCH_ALL_LIMIT = 10
APPS_LIMIT = 15


def app_queries(category: str) -> list[str]:
    """Search phrases used to find app recommendations for a category."""
    return [
        f"best shopify app {category}",
        f"shopify {category} app recommendation",
        f"shopify {category} app review",
    ]


class RedditResearcher:
    """Runs the search / comments / search-all / apps commands."""

    def __init__(
        self,
        client: Optional[RedditClient] = None,
        limiter: Optional[RateLimiter] = None,
        config: Optional[ResearcherConfig] = None,
    ):
        self.config = config or (client.config if client else ResearcherConfig())
        self.client = client or RedditClient(self.config)
        self.limiter = limiter or RateLimiter.from_config(self.config)

    @classmethod
    def from_config(cls, config: ResearcherConfig) -> "RedditResearcher":
        return cls(RedditClient(config), RateLimiter.from_config(config), config)

    def search(
        self,
        subreddit: Optional[str] = None,
        query: Optional[str] = None,
        sort: Optional[str] = None,
        time: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Search one subreddit with restrict_sr=1."""
        if subreddit:
            subreddit = normalize_subreddit(subreddit)
        if not subreddit or not query:
            return error_envelope("Missing required args: --subreddit and --query")

        params = {
            "q": query,
            "restrict_sr": 1,
            "sort": sort or DEFAULT_SORT,
            "t": time or DEFAULT_TIME,
            "limit": limit or SEARCH_LIMIT,
        }

        log(f'Searching r/{subreddit} for "{query}"')
        result = self.client.get(f"/r/{subreddit}/search", params)
        if not result.ok:
            return error_envelope(result.error)

        posts = [extract_post(child).to_dict() for child in listing_children(result.data)]
        return ok_envelope(
            {
                "subreddit": subreddit,
                "query": query,
                "count": len(posts),
                "posts": posts,
            }
        )

    def comments(
        self,
        url: Optional[str] = None,
        limit: Optional[int] = None,
        depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Fetch a post and its comment tree, flattened."""
        if not url:
            return error_envelope("Missing required arg: --url")
        if depth is None:
            depth = self.config.comment_depth
        if depth < 1:
            return error_envelope("Invalid --depth: must be at least 1")

        path = post_path(url)
        log(f"Fetching comments from {path}")
        result = self.client.get(path, {"limit": limit or COMMENTS_LIMIT})
        if not result.ok:
            return error_envelope(result.error)

        post_child, comment_children = parse_thread(result.data)
        post = extract_post(post_child).to_dict() if post_child else None
        comments = [
            comment.to_dict()
            for comment in flatten_comments(comment_children, max_depth=depth)
        ]

        return ok_envelope({"post": post, "count": len(comments), "comments": comments})

    def search_all(
        self,
        query: Optional[str] = None,
        sort: Optional[str] = None,
        time: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Search every target subreddit in turn, collecting failures."""
        if not query:
            return error_envelope("Missing required arg: --query")

        subreddits = self.config.target_subreddits
        posts = []
        errors = []

        for subreddit in self.limiter.pace(subreddits):
            result = self.search(
                subreddit=subreddit,
                query=query,
                sort=sort,
                time=time,
                limit=limit or SEARCH_ALL_LIMIT,
            )
            if result["ok"]:
                posts.extend(result["data"]["posts"])
            else:
                errors.append({"subreddit": subreddit, "error": result["error"]})
                log(f"Failed on r/{subreddit}: {result['error']}")

        data = {
            "query": query,
            "subreddits_searched": len(subreddits),
            "subreddits_failed": len(errors),
            "total_posts": len(posts),
            "posts": posts,
        }
        if errors:
            data["errors"] = errors
        return ok_envelope(data)

    def apps(
        self,
        category: Optional[str] = None,
        sort: Optional[str] = None,
        time: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Look for app recommendations in a category, deduplicated by post id."""
        if not category:
            return error_envelope("Missing required arg: --category")

        searches = [
            (query, subreddit)
            for query in app_queries(category)
            for subreddit in self.config.app_subreddits
        ]
        seen = set()
        posts = []
        errors = []

        for query, subreddit in self.limiter.pace(searches):
            result = self.search(
                subreddit=subreddit,
                query=query,
                sort=sort,
                time=time,
                limit=limit or APPS_LIMIT,
            )
            if not result["ok"]:
                errors.append({"subreddit": subreddit, "query": query, "error": result["error"]})
                log(f"Failed on r/{subreddit} ({query}): {result['error']}")
                continue

            for post in result["data"]["posts"]:
                if post["id"] not in seen:
                    seen.add(post["id"])
                    posts.append(post)

        data = {
            "category": category,
            "queries_run": len(searches),
            "unique_posts": len(posts),
            "posts": posts,
        }
        if errors:
            data["errors"] = errors
        return ok_envelope(data)
