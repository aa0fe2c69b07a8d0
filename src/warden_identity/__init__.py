"""Warden Identity - accounts, verification and password recovery.

This package handles all identity-related concerns:
- Users, profiles and single-use tokens (domain)
- Input validation rules
- Store contracts and their SQLAlchemy implementation
- Email notifications (verification, password reset)
- The AuthEngine that ties them together

Credential primitives (hashing, session tokens) live in warden_auth;
this package only orchestrates them.
"""

from warden_identity.application import (
    AuthEngine,
    EngineConfig,
    SignInResult,
    SignUpResult,
    TokenVerification,
    UserAccount,
    VerifyEmailResult,
)
from warden_identity.domain import Profile, TokenType, User, UserToken
from warden_identity.exceptions import (
    BadRequestError,
    ConflictError,
    DomainException,
    EmailAlreadyExistsError,
    EmailNotVerifiedError,
    EntityNotFoundError,
    ErrorCode,
    FieldIssue,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidSessionError,
    InvalidVerificationTokenError,
    PasswordResetRateLimitError,
    ResetTokenExpiredError,
    UnauthorizedError,
    UsernameTakenError,
    UserNotFoundError,
    ValidationError,
    VerificationTokenExpiredError,
)
from warden_identity.repositories import (
    RateLimitCounterRepository,
    UnitOfWork,
    UserCredentialData,
    UserCredentialRepository,
    UserProfileRepository,
    UserRepository,
    UserTokenRepository,
)
from warden_identity.services import RateLimiter

__all__ = [
    # Application
    "AuthEngine",
    "EngineConfig",
    "SignInResult",
    "SignUpResult",
    "TokenVerification",
    "UserAccount",
    "VerifyEmailResult",
    # Domain
    "Profile",
    "TokenType",
    "User",
    "UserToken",
    # Exceptions
    "BadRequestError",
    "ConflictError",
    "DomainException",
    "EmailAlreadyExistsError",
    "EmailNotVerifiedError",
    "EntityNotFoundError",
    "ErrorCode",
    "FieldIssue",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "InvalidSessionError",
    "InvalidVerificationTokenError",
    "PasswordResetRateLimitError",
    "ResetTokenExpiredError",
    "UnauthorizedError",
    "UserNotFoundError",
    "UsernameTakenError",
    "ValidationError",
    "VerificationTokenExpiredError",
    # Repositories
    "RateLimitCounterRepository",
    "UnitOfWork",
    "UserCredentialData",
    "UserCredentialRepository",
    "UserProfileRepository",
    "UserRepository",
    "UserTokenRepository",
    # Services
    "RateLimiter",
]
