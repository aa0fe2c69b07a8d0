"""Abstract repository interfaces for identity management."""

from warden_identity.repositories.rate_limit_counter_repository import (
    RateLimitCounterRepository,
)
from warden_identity.repositories.unit_of_work import UnitOfWork
from warden_identity.repositories.user_credential_repository import (
    UserCredentialData,
    UserCredentialRepository,
)
from warden_identity.repositories.user_profile_repository import (
    UserProfileRepository,
)
from warden_identity.repositories.user_repository import UserRepository
from warden_identity.repositories.user_token_repository import UserTokenRepository

__all__ = [
    "RateLimitCounterRepository",
    "UnitOfWork",
    "UserCredentialData",
    "UserCredentialRepository",
    "UserProfileRepository",
    "UserRepository",
    "UserTokenRepository",
]
