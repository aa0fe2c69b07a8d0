"""Shared slowapi rate limiter instance.

Routes apply per-client limits with ``@limiter.limit(...)`` placed directly
above the endpoint function, below the router decorator, so the router
registers the limited wrapper. Limited endpoints must accept a
``request: Request`` parameter. One shared instance keeps a single counter
store for all routes.

slowapi evaluates limit callables without the request, so ``create_app``
hands its settings over through ``configure_limiter``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from warden_config.settings import Settings, get_settings

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")

_app_settings: Settings | None = None


def configure_limiter(settings: Settings) -> None:
    """Apply an application's rate limit settings to the shared limiter."""
    global _app_settings
    _app_settings = settings
    limiter.enabled = settings.rate_limit_enabled


def _current_settings() -> Settings:
    return _app_settings or get_settings()


def sign_in_limit() -> str:
    return _current_settings().rate_limit_sign_in


def sensitive_limit() -> str:
    """Limit shared by sign-up, verification resend and password reset requests."""
    return _current_settings().rate_limit_sensitive
