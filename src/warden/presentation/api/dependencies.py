"""FastAPI dependency injection for the Warden API.

Provides dependencies for:
- Database sessions
- The auth engine
- Authentication (current account from the session token)
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from warden.presentation.api.config import get_api_settings
from warden_config.settings import Settings
from warden_identity.application import AuthEngine, UserAccount
from warden_identity.application.factory import build_auth_engine
from warden_identity.infrastructure.email import EmailService

logger = logging.getLogger(__name__)

# Security scheme for session Bearer tokens
security = HTTPBearer(auto_error=False)

# Cookie carrying the session token
AUTH_COOKIE = "auth_token"

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request from the app's shared pool.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Auth Engine
# -----------------------------------------------------------------------------


def get_email_service(settings: SettingsDep) -> EmailService:
    """Get the SMTP email service. Overridden in tests."""
    return EmailService(settings)


async def get_auth_engine(
    session: DBSession,
    settings: SettingsDep,
    email_service: EmailService = Depends(get_email_service),
) -> AuthEngine:
    """Get an auth engine bound to the request's session."""
    return build_auth_engine(session, settings, email_service)


# Type alias for injected auth engine
AuthEngineDep = Annotated[AuthEngine, Depends(get_auth_engine)]


# -----------------------------------------------------------------------------
# Current Account (session token)
# -----------------------------------------------------------------------------


def get_session_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_token: Annotated[str | None, Cookie(alias=AUTH_COOKIE)] = None,
) -> str | None:
    """Read the session token from the Authorization header, else the cookie."""
    if credentials is not None:
        return credentials.credentials
    return auth_token


async def get_current_account(
    engine: AuthEngineDep,
    token: str | None = Depends(get_session_token),
) -> UserAccount:
    """
    FastAPI dependency to get the currently authenticated account.

    Raises
    ------
    InvalidSessionError
        If the token is missing, invalid, expired, or its user is gone
    """
    return await engine.authenticate(token)


# Type alias for injected current account
CurrentAccount = Annotated[UserAccount, Depends(get_current_account)]
