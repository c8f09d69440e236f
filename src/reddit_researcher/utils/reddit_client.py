"""Reddit client utilities for reddit-researcher.

Uses Reddit's public .json endpoints — no authentication required.
Appending .json to any Reddit URL returns structured JSON data.
Reddit sometimes answers with an HTML interstitial instead of JSON;
those responses are treated like 5xx errors and retried.
"""

import json
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import urlencode

import requests

from .config import ResearcherConfig
from .output import log


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one logical GET: parsed JSON or an error message"""
    ok: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Any) -> "FetchResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(ok=False, error=error)


class RetryableError(Exception):
    """A failed attempt that is worth repeating"""


def looks_like_html(text: str) -> bool:
    """Return True when a body is an HTML page rather than JSON."""
    return text.lstrip().startswith("<") or "<!doctype" in text.lower()


def build_url(base_url: str, path: str, params: dict = None) -> str:
    """Build reddit.com/{path}.json?{params}, skipping None values."""
    if not path.startswith("/"):
        path = "/" + path
    if not path.endswith(".json"):
        path += ".json"
    url = f"{base_url.rstrip('/')}{path}"
    query = {k: v for k, v in (params or {}).items() if v is not None}
    if query:
        url += "?" + urlencode(query)
    return url


class RedditClient:
    """Synchronous HTTP client for Reddit's .json endpoints with retries."""

    def __init__(
        self,
        config: ResearcherConfig = None,
        sleep: Callable[[float], None] = None,
        jitter: Callable[[float, float], float] = None,
    ):
        self.config = config or ResearcherConfig()
        self._sleep = sleep or time.sleep
        self._jitter = jitter or random.uniform
        self.session = requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent
        self.session.headers["Accept"] = "application/json"

    def url(self, path: str, params: dict = None) -> str:
        return build_url(self.config.base_url, path, params)

    def backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter; attempt is 1 for the first retry."""
        return self.config.backoff_base * 2 ** attempt + self._jitter(
            0, self.config.backoff_jitter
        )

    def get(self, path: str, params: dict = None) -> FetchResult:
        """GET reddit.com/{path}.json with params.

        Args:
            path: Reddit URL path (e.g., '/r/shopify/search')
            params: Query parameters

        Returns:
            FetchResult with the parsed JSON response
        """
        return self.fetch_json(self.url(path, params))

    def fetch_json(self, url: str) -> FetchResult:
        """Fetch a fully formed URL, retrying transient failures.

        Never raises: every failure comes back as ``FetchResult.failure``.
        """
        max_attempts = self.config.max_attempts
        last_error = None

        for attempt in range(max_attempts):
            if attempt > 0:
                delay = self.backoff_delay(attempt)
                log(f"Retry {attempt}/{max_attempts} after {delay * 1000:.0f}ms")
                self._sleep(delay)

            try:
                return self._attempt(url)
            except RetryableError as exc:
                last_error = str(exc)

        return FetchResult.failure(
            f"Failed after {max_attempts} retries: {last_error}"
        )

    def _attempt(self, url: str) -> FetchResult:
        """Run a single GET; raise RetryableError for transient failures."""
        timeout = self.config.request_timeout
        try:
            resp = self.session.get(url, timeout=timeout)
        except requests.Timeout as exc:
            log(f"Timeout fetching {url}")
            raise RetryableError(
                f"Request timed out after {timeout * 1000:.0f}ms"
            ) from exc
        except requests.RequestException as exc:
            log(f"Error: {exc}")
            raise RetryableError(str(exc)) from exc

        status = resp.status_code
        if status == 429 or status >= 500:
            log(f"Retryable HTTP {status} from {url}")
            raise RetryableError(f"HTTP {status}")

        if not 200 <= status < 300:
            return FetchResult.failure(f"HTTP {status} from {url}")

        text = resp.text
        if looks_like_html(text):
            log("Got HTML response, retrying...")
            raise RetryableError("Reddit returned HTML instead of JSON")

        try:
            data = json.loads(text)
        except ValueError as exc:
            log(f"Error: {exc}")
            raise RetryableError(f"Invalid JSON: {exc}") from exc

        return FetchResult.success(data)
