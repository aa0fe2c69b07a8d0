"""
Pytest configuration for warden_identity integration tests.

Integration tests run against a fresh in-memory SQLite database per test.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import async_engine, db_session

__all__ = [
    "async_engine",
    "db_session",
]
