"""Result types returned by the auth engine.

Password hashes and credential rows never appear here.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from warden_identity.domain.user import Profile, User


@dataclass(frozen=True)
class UserAccount:
    """Public view of a user joined with their profile."""

    id: UUID
    email: str
    name: str | None
    email_verified: bool
    onboarding_complete: bool
    username: str | None
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User, profile: Profile | None) -> "UserAccount":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            email_verified=profile.email_verified if profile else False,
            onboarding_complete=profile.onboarding_complete if profile else False,
            username=profile.username if profile else None,
            created_at=user.created_at,
        )


@dataclass(frozen=True)
class SignUpResult:
    message: str
    user: UserAccount
    token: str | None = None


@dataclass(frozen=True)
class SignInResult:
    token: str
    user: UserAccount


@dataclass(frozen=True)
class TokenVerification:
    valid: bool
    user_id: UUID | None = None


@dataclass(frozen=True)
class VerifyEmailResult:
    message: str
    token: str | None = None
    user: UserAccount | None = None
