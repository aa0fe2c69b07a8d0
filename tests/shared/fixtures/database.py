"""
In-memory SQLite fixtures for integration tests.

Every test gets a fresh database: the engine is created per test with a
StaticPool so that all sessions share the single in-memory connection.

Usage:
    # In your conftest.py
    from tests.shared.fixtures.database import async_engine, db_session

    async def test_something(db_session):
        repo = SomeRepository(db_session)
        await repo.save(entity)
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from warden_identity.infrastructure.persistence.sqlalchemy import (
    create_session_maker,
    create_tables,
)

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_memory_engine():
    """Create an engine bound to a private in-memory SQLite database."""
    return create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest_asyncio.fixture
async def async_engine():
    """Engine with all identity tables created."""
    engine = make_memory_engine()
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncSession:
    """A session on the test database, rolled back after the test."""
    session_maker = create_session_maker(async_engine)
    async with session_maker() as session:
        yield session
        await session.rollback()
