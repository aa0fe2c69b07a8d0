# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from warden_identity.infrastructure.persistence.sqlalchemy.models.rate_limit_counter_model import (
    RateLimitCounterModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_credential_model import (
    UserCredentialModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_profile_model import (
    UserProfileModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_token_model import (
    UserTokenModel,
)

__all__ = [
    "RateLimitCounterModel",
    "UserCredentialModel",
    "UserModel",
    "UserProfileModel",
    "UserTokenModel",
]
