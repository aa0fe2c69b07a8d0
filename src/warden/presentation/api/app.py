"""FastAPI application factory.

Creates and configures the FastAPI application with the auth router,
middleware, rate limiting and exception handlers.

The health check endpoint is served at /health; everything else lives
under /auth.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from warden.presentation.api.exception_handlers import setup_exception_handlers
from warden.presentation.api.limiter import configure_limiter, limiter
from warden.presentation.api.routers import auth_router
from warden_config.settings import Settings, get_settings
from warden_identity.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_session_maker,
    create_tables,
)


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the warden packages with:
    - Console output with timestamps and module names
    - Configurable log level for warden modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("warden", "warden_auth", "warden_identity", "warden_config"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account lifecycle and sessions.

**Registration:**
- Sign up with email and password, then confirm the email address
- Verification links are valid for 48 hours and can be re-sent

**Sessions:**
- Sign in returns a signed session token (header and HttpOnly cookie)
- Tokens are stateless and valid until they expire

**Password Reset:**
- Reset links are valid for 1 hour and can be used once
- Requests are limited per user
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting %s API v%s...", app.state.settings.app_name, API_VERSION)
    engine: AsyncEngine = app.state.db_engine
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the engine if this app created it
    logger.info("Shutting down API...")
    if app.state.owns_db_engine:
        await engine.dispose()
        logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_app(
    settings: Settings | None = None,
    db_engine: AsyncEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    db_engine
        Optional database engine (e.g. in-memory SQLite for tests). When
        omitted, one is created from ``settings.database_url``.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    if settings.uses_insecure_jwt_secret:
        logger.warning(
            "JWT_SECRET_KEY is not set; sessions are signed with the insecure "
            "default secret. Configure a real secret before deploying.",
        )

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account registration, email verification, sign-in and password reset.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.settings = settings
    app.state.owns_db_engine = db_engine is None
    app.state.db_engine = db_engine or create_engine(settings.database_url)
    app.state.session_maker = create_session_maker(app.state.db_engine)

    # slowapi looks for app.state.limiter by convention
    configure_limiter(settings)
    app.state.limiter = limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization"],
    )

    setup_exception_handlers(app)

    app.include_router(auth_router, prefix="/auth", tags=["Authentication"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app
