"""Structural input validation for the auth engine.

Each engine operation validates its arguments against one of the models
below before touching the store. Validation failures are converted into a
single ValidationError that lists every problem found, including one issue
per unmet password rule.
"""

import re
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from warden_identity.exceptions import FieldIssue, ValidationError

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
NAME_MAX_LENGTH = 100
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
)
_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

# (code, pattern, message); checked in order, all failures reported
_PASSWORD_RULES: list[tuple[str, re.Pattern[str], str]] = [
    (
        "password_uppercase",
        re.compile(r"[A-Z]"),
        "Password must contain at least one uppercase letter",
    ),
    (
        "password_lowercase",
        re.compile(r"[a-z]"),
        "Password must contain at least one lowercase letter",
    ),
    (
        "password_number",
        re.compile(r"[0-9]"),
        "Password must contain at least one number",
    ),
    (
        "password_special",
        re.compile(f"[{re.escape(PASSWORD_SYMBOLS)}]"),
        "Password must contain at least one special character",
    ),
]

_PASSWORD_STRENGTH = "password_strength"


def _check_email(value: str) -> str:
    if not _EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Invalid email address")
    return value


def _check_strong_password(value: str) -> str:
    issues = []
    if len(value) < PASSWORD_MIN_LENGTH:
        issues.append(
            (
                "password_too_short",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            ),
        )
    issues.extend(
        (code, message)
        for code, pattern, message in _PASSWORD_RULES
        if not pattern.search(value)
    )
    if issues:
        raise PydanticCustomError(
            _PASSWORD_STRENGTH,
            "Password does not meet requirements",
            {"issues": issues},
        )
    return value


def _check_required_password(value: str) -> str:
    if not value:
        raise PydanticCustomError("password_required", "Password is required")
    return value


def _check_token(value: str) -> str:
    if not _UUID_PATTERN.match(value):
        raise PydanticCustomError("token_format", "Invalid token format")
    return value


def _check_name(value: str | None) -> str | None:
    if value is None:
        return None
    if not 1 <= len(value) <= NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "name_length",
            "Name must be between 1 and {max_length} characters",
            {"max_length": NAME_MAX_LENGTH},
        )
    return value


def _check_username(value: str) -> str:
    if len(value) < USERNAME_MIN_LENGTH:
        raise PydanticCustomError(
            "username_too_short",
            "Username must be at least {min_length} characters",
            {"min_length": USERNAME_MIN_LENGTH},
        )
    if len(value) > USERNAME_MAX_LENGTH:
        raise PydanticCustomError(
            "username_too_long",
            "Username must be at most {max_length} characters",
            {"max_length": USERNAME_MAX_LENGTH},
        )
    if not _USERNAME_PATTERN.match(value):
        raise PydanticCustomError(
            "username_format",
            "Username can only contain letters, numbers, underscores, and hyphens",
        )
    return value.lower()


EmailAddress = Annotated[str, AfterValidator(_check_email)]
NewPassword = Annotated[str, AfterValidator(_check_strong_password)]
RequiredPassword = Annotated[str, AfterValidator(_check_required_password)]
TokenValue = Annotated[str, AfterValidator(_check_token)]
DisplayName = Annotated[str | None, AfterValidator(_check_name)]
Username = Annotated[str, AfterValidator(_check_username)]


class _Input(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class SignUpInput(_Input):
    email: EmailAddress
    password: NewPassword
    name: DisplayName = None


class SignInInput(_Input):
    """Used by sign-in and credential checks alike."""

    email: EmailAddress
    password: RequiredPassword


class EmailInput(_Input):
    """Password reset requests and verification email resends."""

    email: EmailAddress


class VerifyEmailInput(_Input):
    token: TokenValue


class ResetPasswordInput(_Input):
    token: TokenValue
    new_password: NewPassword


class OnboardingInput(_Input):
    username: Username


InputT = TypeVar("InputT", bound=BaseModel)


def validate_input(schema: type[InputT], **values: Any) -> InputT:
    """Validate keyword arguments against an input model.

    Parameters
    ----------
    schema
        The input model to validate against
    **values
        Raw field values

    Returns
    -------
    The validated (and normalised) model instance

    Raises
    ------
    ValidationError
        Listing every field issue found
    """
    try:
        return schema.model_validate(values)
    except PydanticValidationError as e:
        raise ValidationError(_collect_issues(e)) from e


def _collect_issues(error: PydanticValidationError) -> list[FieldIssue]:
    issues: list[FieldIssue] = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "input"
        if item["type"] == _PASSWORD_STRENGTH:
            issues.extend(
                FieldIssue(field=field, message=message, code=code)
                for code, message in item["ctx"]["issues"]
            )
            continue
        issues.append(FieldIssue(field=field, message=item["msg"], code=item["type"]))
    return issues
