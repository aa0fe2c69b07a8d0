"""Centralized exception handlers for the FastAPI application.

Identity exceptions are mapped to HTTP responses through their error code.
Every error response shares one envelope:

    {
        "success": false,
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "errors": [{"field": "...", "message": "...", "code": "..."}]
    }

``errors`` is only present for validation failures.

Usage:
    from warden.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from warden_identity.exceptions import (
    BadRequestError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    FieldIssue,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VERIFICATION_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VERIFICATION_TOKEN_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RESET_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RESET_TOKEN_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_RESET_RATE_LIMITED: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_SESSION: status.HTTP_401_UNAUTHORIZED,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.USERNAME_TAKEN: status.HTTP_409_CONFLICT,
    # 429 Too Many Requests
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, BadRequestError):
        return status.HTTP_400_BAD_REQUEST

    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    errors: list[FieldIssue] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "success": False,
        "message": message,
        "code": code,
    }
    if errors is not None:
        content["errors"] = [issue.to_dict() for issue in errors]
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _issues_from_request_errors(exc: RequestValidationError) -> list[FieldIssue]:
    issues = []
    for item in exc.errors():
        # Drop the leading "body"/"query" location segment
        loc = [str(part) for part in item.get("loc", ())[1:]]
        issues.append(
            FieldIssue(
                field=".".join(loc) or "body",
                message=item.get("msg", "Invalid value"),
                code=item.get("type", "invalid"),
            ),
        )
    return issues


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi limit breaches.

    Raised by the @limiter.limit wrappers on the auth routes.
    """
    logger.warning(
        "Rate limit exceeded on %s %s: %s",
        request.method,
        request.url.path,
        exc.detail,
    )
    return _create_error_response(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        message="Too many requests. Please try again later.",
        code=ErrorCode.RATE_LIMIT_EXCEEDED.value,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all identity exceptions with structured response.

        Logs the exception details for debugging while returning
        a safe, user-friendly message to the client.
        """
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            errors=exc.issues if isinstance(exc, ValidationError) else None,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies the same way as engine validation."""
        issues = _issues_from_request_errors(exc)
        logger.warning(
            "Request validation failed on %s %s: %d issue(s)",
            request.method,
            request.url.path,
            len(issues),
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Validation failed",
            code=ErrorCode.VALIDATION_ERROR.value,
            errors=issues,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Wrap routing and framework HTTP errors (404, 405, ...) in the envelope."""
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=f"HTTP_{exc.status_code}",
            headers=getattr(exc, "headers", None),
        )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        The stack trace is logged, never returned.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Internal server error",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
