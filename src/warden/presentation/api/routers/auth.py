"""Authentication router: registration, verification, sign-in and password reset."""

import logging
from typing import Annotated

from fastapi import APIRouter, Header, Request, Response, status

from warden.presentation.api.dependencies import (
    AUTH_COOKIE,
    AuthEngineDep,
    CurrentAccount,
    SettingsDep,
)
from warden.presentation.api.limiter import limiter, sensitive_limit, sign_in_limit
from warden.presentation.api.schemas import (
    ApiResponse,
    AuthData,
    EmailRequest,
    ErrorResponse,
    OnboardingRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    TokenValidity,
    UserResponse,
    VerifyEmailRequest,
)
from warden_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
}


def _set_session(response: Response, token: str, settings: Settings) -> None:
    """Hand the session token to the client.

    The token goes into the Authorization response header and an HttpOnly
    cookie (SameSite=Lax, Secure when api_cookie_secure is set).
    """
    response.headers["Authorization"] = f"Bearer {token}"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite="lax",
        max_age=int(settings.jwt_expiration_delta.total_seconds()),
        domain=settings.api_cookie_domain,
    )


@router.post(
    "/sign-up",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={**_ERRORS, 409: {"model": ErrorResponse, "description": "Email already exists"}},
)
@limiter.limit(sensitive_limit)
async def sign_up(
    request: Request,
    body: SignUpRequest,
    response: Response,
    engine: AuthEngineDep,
    settings: SettingsDep,
) -> ApiResponse[AuthData]:
    """
    Create an account and send the verification email.

    Depending on configuration, a session token is returned right away.
    """
    result = await engine.sign_up(email=body.email, password=body.password, name=body.name)
    if result.token:
        _set_session(response, result.token, settings)

    return ApiResponse(
        message=result.message,
        data=AuthData(token=result.token, user=UserResponse.from_account(result.user)),
    )


@router.post(
    "/sign-in",
    summary="Authenticate user",
    responses={
        **_ERRORS,
        401: {"model": ErrorResponse, "description": "Invalid credentials or email not verified"},
    },
)
@limiter.limit(sign_in_limit)
async def sign_in(
    request: Request,
    body: SignInRequest,
    response: Response,
    engine: AuthEngineDep,
    settings: SettingsDep,
) -> ApiResponse[AuthData]:
    result = await engine.sign_in(email=body.email, password=body.password)
    _set_session(response, result.token, settings)

    return ApiResponse(
        data=AuthData(token=result.token, user=UserResponse.from_account(result.user)),
    )


@router.get("/verify", summary="Check a session token")
async def verify(
    engine: AuthEngineDep,
    authorization: Annotated[str | None, Header()] = None,
) -> ApiResponse[TokenValidity]:
    """Report whether the bearer token is valid. Never fails for bad tokens."""
    verification = engine.verify_token(authorization)
    return ApiResponse(data=TokenValidity(valid=verification.valid))


@router.post(
    "/verify-email",
    summary="Redeem an email verification token",
    responses=_ERRORS,
)
async def verify_email(
    body: VerifyEmailRequest,
    response: Response,
    engine: AuthEngineDep,
    settings: SettingsDep,
) -> ApiResponse[AuthData]:
    result = await engine.verify_email(body.token)
    if result.token:
        _set_session(response, result.token, settings)

    data = None
    if result.token or result.user:
        data = AuthData(
            token=result.token,
            user=UserResponse.from_account(result.user) if result.user else None,
        )
    return ApiResponse(message=result.message, data=data)


@router.post(
    "/resend-verification",
    summary="Send the verification email again",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(sensitive_limit)
async def resend_verification(
    request: Request,
    body: EmailRequest,
    engine: AuthEngineDep,
) -> ApiResponse[None]:
    message = await engine.resend_verification_email(body.email)
    return ApiResponse(message=message)


@router.post(
    "/forgot-password",
    summary="Request a password reset email",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "User not found"}},
)
@limiter.limit(sensitive_limit)
async def forgot_password(
    request: Request,
    body: EmailRequest,
    engine: AuthEngineDep,
) -> ApiResponse[None]:
    message = await engine.request_password_reset(body.email)
    return ApiResponse(message=message)


@router.post(
    "/reset-password",
    summary="Set a new password with a reset token",
    responses=_ERRORS,
)
async def reset_password(
    body: ResetPasswordRequest,
    engine: AuthEngineDep,
) -> ApiResponse[None]:
    message = await engine.reset_password(body.token, body.new_password)
    return ApiResponse(message=message)


@router.get(
    "/me",
    summary="Get the current account",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def me(account: CurrentAccount) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.from_account(account))


@router.post(
    "/onboarding",
    summary="Choose a username",
    responses={
        **_ERRORS,
        401: {"model": ErrorResponse, "description": "Not authenticated or email not verified"},
        409: {"model": ErrorResponse, "description": "Username already taken"},
    },
)
async def onboarding(
    body: OnboardingRequest,
    account: CurrentAccount,
    engine: AuthEngineDep,
) -> ApiResponse[UserResponse]:
    updated = await engine.complete_onboarding(account.id, body.username)
    return ApiResponse(data=UserResponse.from_account(updated))
