"""Unit tests for batch pacing."""

import pytest

from reddit_researcher.utils.config import ResearcherConfig
from reddit_researcher.utils.rate_limit import RateLimiter


class TestRateLimiter:
    """Tests for RateLimiter.pace."""

    def test_no_pause_before_first_item(self, limiter, pauses):
        assert list(limiter.pace(["only"])) == ["only"]
        assert pauses == []

    def test_pause_between_items(self, limiter, pauses):
        assert list(limiter.pace(["a", "b", "c"])) == ["a", "b", "c"]
        assert pauses == [2.0, 2.0]

    def test_jitter_added(self, pauses):
        limiter = RateLimiter(delay=2.0, jitter=0.5, sleep=pauses.append, rand=lambda low, high: high)
        list(limiter.pace(range(3)))
        assert pauses == pytest.approx([2.5, 2.5])

    def test_pause_happens_before_yield(self, limiter, pauses):
        seen = []
        for item in limiter.pace(["a", "b"]):
            seen.append((item, len(pauses)))
        assert seen == [("a", 0), ("b", 1)]

    def test_each_batch_starts_fresh(self, limiter, pauses):
        list(limiter.pace(["a", "b"]))
        list(limiter.pace(["c", "d"]))
        assert len(pauses) == 2

    def test_from_config(self, pauses):
        config = ResearcherConfig(rate_limit_delay=0.25, rate_limit_jitter=0.0)
        limiter = RateLimiter.from_config(config, sleep=pauses.append)
        list(limiter.pace([1, 2]))
        assert pauses == pytest.approx([0.25])
