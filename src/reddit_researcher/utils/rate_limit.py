"""Pacing for sequential batches of Reddit requests"""

import random
import time
from typing import Callable, Iterable, Iterator, TypeVar

from .config import ResearcherConfig
from .output import log

T = TypeVar("T")


class RateLimiter:
    """Sleep a fixed delay plus jitter between consecutive batch items.

    The first item of every batch goes out immediately.
    """

    def __init__(
        self,
        delay: float = 2.0,
        jitter: float = 0.5,
        sleep: Callable[[float], None] = None,
        rand: Callable[[float, float], float] = None,
    ):
        self.delay = delay
        self.jitter = jitter
        self._sleep = sleep or time.sleep
        self._rand = rand or random.uniform

    @classmethod
    def from_config(cls, config: ResearcherConfig, **kwargs) -> "RateLimiter":
        return cls(config.rate_limit_delay, config.rate_limit_jitter, **kwargs)

    def pause(self):
        delay = self.delay + self._rand(0, self.jitter)
        log(f"Rate-limit pause {delay * 1000:.0f}ms")
        self._sleep(delay)

    def pace(self, items: Iterable[T]) -> Iterator[T]:
        """Yield items in order, pausing before each one after the first."""
        for index, item in enumerate(items):
            if index > 0:
                self.pause()
            yield item
