"""SQLAlchemy implementation for warden_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- Models for users, credentials, profiles, tokens and rate-limit counters
- Repository implementations and the session-backed unit of work
- create_tables / drop_tables for schema management
"""

from warden_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)
from warden_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine,
    create_session_maker,
    create_tables,
    drop_tables,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    RateLimitCounterModel,
    UserCredentialModel,
    UserModel,
    UserProfileModel,
    UserTokenModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories import (
    RateLimitCounterRepositorySQLAlchemy,
    SQLAlchemyUnitOfWork,
    UserCredentialRepositorySQLAlchemy,
    UserProfileRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    UserTokenRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "RateLimitCounterModel",
    "RateLimitCounterRepositorySQLAlchemy",
    "SQLAlchemyUnitOfWork",
    "TimestampMixin",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
    "UserModel",
    "UserProfileModel",
    "UserProfileRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
    "UserTokenModel",
    "UserTokenRepositorySQLAlchemy",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
