"""Unit tests for the fixed-window RateLimiter."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from warden_identity.domain.time import utc_now
from warden_identity.services import RateLimiter

WINDOW = timedelta(minutes=60)


class TestRateLimiter:
    """Tests for hit accounting against the counter store."""

    def setup_method(self):
        """Set up test fixtures."""
        self.counters = AsyncMock()
        self.limiter = RateLimiter(self.counters, max_requests=3, window=WINDOW)
        self.now = utc_now()

    def test_key_for(self):
        assert RateLimiter.key_for("password_reset", "abc") == "password_reset:abc"

    @pytest.mark.asyncio
    async def test_hits_up_to_limit_allowed(self):
        self.counters.hit.return_value = (3, self.now)

        decision = await self.limiter.hit("k", self.now)

        assert decision.allowed
        assert decision.count == 3
        assert decision.retry_after is None
        self.counters.hit.assert_awaited_once_with("k", WINDOW, self.now)

    @pytest.mark.asyncio
    async def test_hit_over_limit_denied_with_retry_after(self):
        window_start = self.now - timedelta(minutes=20)
        self.counters.hit.return_value = (4, window_start)

        decision = await self.limiter.hit("k", self.now)

        assert not decision.allowed
        assert decision.count == 4
        assert decision.retry_after == timedelta(minutes=40)

    @pytest.mark.asyncio
    async def test_retry_after_never_negative(self):
        self.counters.hit.return_value = (5, self.now - timedelta(hours=2))

        decision = await self.limiter.hit("k", self.now)

        assert decision.retry_after == timedelta(0)

    @pytest.mark.asyncio
    async def test_zero_max_disables_limiter(self):
        limiter = RateLimiter(self.counters, max_requests=0, window=WINDOW)

        decision = await limiter.hit("k", self.now)

        assert not limiter.enabled
        assert decision.allowed
        self.counters.hit.assert_not_called()

    @pytest.mark.asyncio
    async def test_cleanup_uses_window(self):
        self.counters.cleanup_expired.return_value = 2

        deleted = await self.limiter.cleanup_expired(self.now)

        assert deleted == 2
        self.counters.cleanup_expired.assert_awaited_once_with(WINDOW, self.now)
