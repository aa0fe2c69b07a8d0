"""Wiring of the auth engine against the SQLAlchemy store."""

from sqlalchemy.ext.asyncio import AsyncSession

from warden_auth import JWTService, PasswordHashingService, TokenGenerator
from warden_config.settings import Settings
from warden_identity.application.config import EngineConfig
from warden_identity.application.services.auth_engine import AuthEngine
from warden_identity.infrastructure.email import EmailService
from warden_identity.infrastructure.persistence.sqlalchemy import (
    RateLimitCounterRepositorySQLAlchemy,
    SQLAlchemyUnitOfWork,
    UserCredentialRepositorySQLAlchemy,
    UserProfileRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    UserTokenRepositorySQLAlchemy,
)
from warden_identity.services import RateLimiter


def build_jwt_service(settings: Settings) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        expires_in=settings.jwt_expiration_delta,
    )


def build_auth_engine(
    session: AsyncSession,
    settings: Settings,
    email_service: EmailService | None = None,
) -> AuthEngine:
    """Build an AuthEngine whose repositories share one session.

    Parameters
    ----------
    session
        The request-scoped session; the engine commits and rolls it back
    settings
        Application settings
    email_service
        Sender to use instead of the SMTP service built from settings

    Returns
    -------
    A ready AuthEngine
    """
    config = EngineConfig.from_settings(settings)
    return AuthEngine(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_repository=UserCredentialRepositorySQLAlchemy(session),
        profile_repository=UserProfileRepositorySQLAlchemy(session),
        token_repository=UserTokenRepositorySQLAlchemy(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        rate_limiter=RateLimiter(
            RateLimitCounterRepositorySQLAlchemy(session),
            max_requests=config.password_reset_max_requests,
            window=config.password_reset_window,
        ),
        password_service=PasswordHashingService(rounds=settings.bcrypt_rounds),
        jwt_service=build_jwt_service(settings),
        token_generator=TokenGenerator(),
        email_service=email_service or EmailService(settings),
        config=config,
    )
