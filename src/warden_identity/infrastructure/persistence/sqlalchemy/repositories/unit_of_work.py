"""SQLAlchemy implementation of UnitOfWork."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.repositories import UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits or rolls back the request's AsyncSession."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
        except BaseException:
            await self._session.rollback()
            logger.debug("Transaction rolled back")
            raise
        await self._session.commit()
