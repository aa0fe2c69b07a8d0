# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from warden_identity.infrastructure.persistence.sqlalchemy.repositories.rate_limit_counter_repository import (
    RateLimitCounterRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.unit_of_work import (
    SQLAlchemyUnitOfWork,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_credential_repository import (
    UserCredentialRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_profile_repository import (
    UserProfileRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_token_repository import (
    UserTokenRepositorySQLAlchemy,
)

__all__ = [
    "RateLimitCounterRepositorySQLAlchemy",
    "SQLAlchemyUnitOfWork",
    "UserCredentialRepositorySQLAlchemy",
    "UserProfileRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
    "UserTokenRepositorySQLAlchemy",
]
