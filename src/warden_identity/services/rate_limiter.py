"""Fixed-window rate limiter backed by the counter store."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from warden_identity.repositories import RateLimitCounterRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    count: int
    retry_after: timedelta | None = None


class RateLimiter:
    """Allow at most ``max_requests`` hits per key within ``window``.

    The window opens on the first hit for a key. A ``max_requests`` of 0
    disables the limiter and leaves the store untouched.
    """

    def __init__(
        self,
        counters: RateLimitCounterRepository,
        max_requests: int,
        window: timedelta,
    ):
        self._counters = counters
        self._max_requests = max_requests
        self._window = window

    @property
    def enabled(self) -> bool:
        return self._max_requests > 0

    @staticmethod
    def key_for(action: str, identity: object) -> str:
        return f"{action}:{identity}"

    async def hit(self, key: str, now: datetime) -> RateLimitDecision:
        if not self.enabled:
            return RateLimitDecision(allowed=True, count=0)

        count, window_start = await self._counters.hit(key, self._window, now)
        if count <= self._max_requests:
            return RateLimitDecision(allowed=True, count=count)

        logger.debug("Rate limit exceeded for %s (%d hits)", key, count)
        return RateLimitDecision(
            allowed=False,
            count=count,
            retry_after=max(window_start + self._window - now, timedelta(0)),
        )

    async def cleanup_expired(self, now: datetime) -> int:
        return await self._counters.cleanup_expired(self._window, now)
