"""Abstract repository interface for fixed-window rate-limit counters."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta


class RateLimitCounterRepository(ABC):
    """Counters keyed by an action and an identity, e.g. ``"reset:<user id>"``."""

    @abstractmethod
    async def hit(self, key: str, window: timedelta, now: datetime) -> tuple[int, datetime]:
        """Record one hit and return the count within the current window.

        A window opens on the first hit for a key and lasts ``window``. A hit
        after the window has closed opens a new window with a count of 1.

        Parameters
        ----------
        key
            Counter key
        window
            Window length
        now
            Time of the hit

        Returns
        -------
        The count including this hit, and the start of its window
        """

    @abstractmethod
    async def cleanup_expired(self, window: timedelta, now: datetime) -> int:
        """Remove counters whose window closed before ``now``.

        Returns
        -------
        Number of counters deleted
        """
