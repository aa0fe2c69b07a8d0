"""API request and response schemas."""

from warden.presentation.api.schemas.auth import (
    AuthData,
    EmailRequest,
    OnboardingRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    TokenValidity,
    UserResponse,
    VerifyEmailRequest,
)
from warden.presentation.api.schemas.common import ApiResponse, ErrorResponse

__all__ = [
    "ApiResponse",
    "AuthData",
    "EmailRequest",
    "ErrorResponse",
    "OnboardingRequest",
    "ResetPasswordRequest",
    "SignInRequest",
    "SignUpRequest",
    "TokenValidity",
    "UserResponse",
    "VerifyEmailRequest",
]
