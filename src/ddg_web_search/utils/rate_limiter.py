"""Fixed-window rate limiter shared by the searcher and the fetcher."""

import asyncio
import time

from ddg_web_search.logging import get_logger
from ddg_web_search.models import RateLimiterStatus

logger = get_logger("ddg_web_search.utils.rate_limiter")


class RateLimiter:
    """Allow at most ``limit`` requests per ``interval_ms`` window.

    The counter resets wholesale when a window has elapsed. A caller that
    finds the window exhausted sleeps until it ends and then opens a new
    window with itself as the first request. Calls on one instance are
    served in call order; separate instances never share budget.
    """

    def __init__(self, limit: int, interval_ms: int):
        """Create a rate limiter.

        Args:
            limit: Maximum number of requests per window
            interval_ms: Window length in milliseconds

        Raises:
            ValueError: If limit or interval_ms is not positive
        """
        if limit <= 0:
            raise ValueError("Rate limit must be greater than 0")
        if interval_ms <= 0:
            raise ValueError("Rate limit interval must be greater than 0")

        self.limit = limit
        self.interval_ms = interval_ms
        self.requests = 0
        self.window_start = time.monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until a request may be made, then count it."""
        async with self._lock:
            now = time.monotonic()
            elapsed_ms = (now - self.window_start) * 1000

            if elapsed_ms >= self.interval_ms:
                self.requests = 0
                self.window_start = now

            if self.requests < self.limit:
                self.requests += 1
                # The window starts with its first request, not at construction
                if self.requests == 1:
                    self.window_start = now
                return

            wait_ms = self.interval_ms - elapsed_ms
            logger.debug("Rate limit reached, waiting", wait_ms=round(wait_ms))
            await asyncio.sleep(wait_ms / 1000)

            self.requests = 1
            self.window_start = time.monotonic()

    def get_status(self) -> RateLimiterStatus:
        """Get the current counters.

        Returns:
            RateLimiterStatus: Requests in the current window, limit and interval
        """
        return RateLimiterStatus(
            requests=self.requests,
            limit=self.limit,
            interval=self.interval_ms,
        )

    def __repr__(self) -> str:
        return f"<RateLimiter {self.requests}/{self.limit} per {self.interval_ms}ms>"
