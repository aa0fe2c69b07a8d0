"""Identity exceptions and error codes.

Every failure the auth engine reports is a DomainException subclass tagged
with a stable ErrorCode. The presentation layer maps codes to HTTP status
codes; nothing above the engine needs to inspect library error types.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Bad Request (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_VERIFICATION_TOKEN = "INVALID_VERIFICATION_TOKEN"
    VERIFICATION_TOKEN_EXPIRED = "VERIFICATION_TOKEN_EXPIRED"
    INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"
    RESET_TOKEN_EXPIRED = "RESET_TOKEN_EXPIRED"
    PASSWORD_RESET_RATE_LIMITED = "PASSWORD_RESET_RATE_LIMITED"

    # Unauthorized (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    INVALID_SESSION = "INVALID_SESSION"

    # Not Found (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Conflict (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Too Many Requests (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FieldIssue:
    """A single validation problem on one input field."""

    field: str
    message: str
    code: str = "invalid"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class DomainException(Exception):  # NOQA: N818
    """Base exception for all identity errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


# -----------------------------------------------------------------------------
# 400
# -----------------------------------------------------------------------------


class BadRequestError(DomainException):
    """Raised when a request is well-formed but cannot be honoured."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ValidationError(BadRequestError):
    """Raised when structural input validation fails.

    Carries every field issue, not only the first one.
    """

    def __init__(
        self,
        issues: list[FieldIssue],
        message: str = "Validation failed",
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR)
        self.issues = issues


class InvalidVerificationTokenError(BadRequestError):
    def __init__(self, message: str = "Invalid verification token") -> None:
        super().__init__(message, ErrorCode.INVALID_VERIFICATION_TOKEN)


class VerificationTokenExpiredError(BadRequestError):
    def __init__(self, message: str = "Verification token has expired") -> None:
        super().__init__(message, ErrorCode.VERIFICATION_TOKEN_EXPIRED)


class InvalidResetTokenError(BadRequestError):
    def __init__(self, message: str = "Invalid reset token") -> None:
        super().__init__(message, ErrorCode.INVALID_RESET_TOKEN)


class ResetTokenExpiredError(BadRequestError):
    def __init__(self, message: str = "Reset token has expired") -> None:
        super().__init__(message, ErrorCode.RESET_TOKEN_EXPIRED)


class PasswordResetRateLimitError(BadRequestError):
    """Raised when a user asks for too many password resets in one window."""

    def __init__(
        self,
        message: str = "Too many password reset requests. Try again later.",
        retry_after_seconds: int | None = None,
    ) -> None:
        details = {}
        if retry_after_seconds is not None:
            details["retry_after_seconds"] = retry_after_seconds
        super().__init__(message, ErrorCode.PASSWORD_RESET_RATE_LIMITED, details)


# -----------------------------------------------------------------------------
# 401
# -----------------------------------------------------------------------------


class UnauthorizedError(DomainException):
    """Raised when the caller could not be authenticated."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: ErrorCode = ErrorCode.UNAUTHORIZED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidCredentialsError(UnauthorizedError):
    """Raised for an unknown email, missing credentials or a wrong password.

    The three cases share one message so callers cannot tell them apart.
    """

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class EmailNotVerifiedError(UnauthorizedError):
    def __init__(self, message: str = "Email not verified") -> None:
        super().__init__(message, ErrorCode.EMAIL_NOT_VERIFIED)


class InvalidSessionError(UnauthorizedError):
    """Raised when a session token is missing, invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message, ErrorCode.INVALID_SESSION)


# -----------------------------------------------------------------------------
# 404
# -----------------------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UserNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message, ErrorCode.USER_NOT_FOUND)


# -----------------------------------------------------------------------------
# 409
# -----------------------------------------------------------------------------


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmailAlreadyExistsError(ConflictError):
    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else None
        super().__init__("Email already exists", ErrorCode.EMAIL_ALREADY_EXISTS, details)


class UsernameTakenError(ConflictError):
    def __init__(self, username: str | None = None) -> None:
        details = {"username": username} if username else None
        super().__init__("Username already taken", ErrorCode.USERNAME_TAKEN, details)
