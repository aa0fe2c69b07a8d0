"""Authentication schemas for request/response models.

Request fields are plain strings: the auth engine owns validation and
reports every issue at once.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from warden.presentation.api.schemas.common import CamelModel
from warden_identity.application import UserAccount


class SignUpRequest(BaseModel):
    """Request schema for user registration."""

    email: str
    password: str
    name: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Str0ng!Pass",
                "name": "Ada",
            },
        },
    )


class SignInRequest(BaseModel):
    """Request schema for sign-in."""

    email: str
    password: str


class VerifyEmailRequest(BaseModel):
    token: str


class EmailRequest(BaseModel):
    """Request schema for verification resends and password reset requests."""

    email: str


class ResetPasswordRequest(CamelModel):
    """Request schema for resetting a password with a token.

    Accepts ``newPassword`` (web client) or ``new_password``.
    """

    token: str
    new_password: str


class OnboardingRequest(BaseModel):
    username: str


class UserResponse(CamelModel):
    """Response schema for account data."""

    id: UUID
    email: str
    name: str | None = None
    email_verified: bool
    onboarding_complete: bool
    username: str | None = None
    created_at: datetime

    @classmethod
    def from_account(cls, account: UserAccount) -> "UserResponse":
        return cls(
            id=account.id,
            email=account.email,
            name=account.name,
            email_verified=account.email_verified,
            onboarding_complete=account.onboarding_complete,
            username=account.username,
            created_at=account.created_at,
        )


class AuthData(BaseModel):
    """Session token (when one was issued) plus the account."""

    token: str | None = None
    user: UserResponse | None = None


class TokenValidity(BaseModel):
    valid: bool
