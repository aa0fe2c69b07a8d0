"""SQLAlchemy implementation of RateLimitCounterRepository."""

from datetime import datetime, timedelta

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.time import ensure_tz_aware
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    RateLimitCounterModel,
)
from warden_identity.repositories import RateLimitCounterRepository


class RateLimitCounterRepositorySQLAlchemy(RateLimitCounterRepository):
    """Fixed-window counters updated with single-statement UPDATEs.

    Concurrent hits on an existing key are serialized by the database. Two
    concurrent first hits on a new key may race on the INSERT; the loser
    fails on the primary key.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def hit(
        self,
        key: str,
        window: timedelta,
        now: datetime,
    ) -> tuple[int, datetime]:
        window_floor = now - window
        model = RateLimitCounterModel

        # Window still open: count the hit
        result = await self._session.execute(
            update(model)
            .where(model.key == key, model.window_start > window_floor)
            .values(count=model.count + 1)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            # Window closed: open a new one
            result = await self._session.execute(
                update(model)
                .where(model.key == key, model.window_start <= window_floor)
                .values(count=1, window_start=now)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                self._session.add(model(key=key, window_start=now, count=1))
                await self._session.flush()
                return 1, now

        result = await self._session.execute(
            select(model.count, model.window_start).where(model.key == key),
        )
        count, window_start = result.one()
        return count, ensure_tz_aware(window_start)

    async def cleanup_expired(self, window: timedelta, now: datetime) -> int:
        stmt = (
            delete(RateLimitCounterModel)
            .where(RateLimitCounterModel.window_start <= now - window)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]
