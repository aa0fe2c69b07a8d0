"""Auth engine configuration."""

from dataclasses import dataclass
from datetime import timedelta

from warden_config.settings import Settings


@dataclass(frozen=True)
class EngineConfig:
    """Behavioural knobs of the auth engine, fixed at construction.

    Attributes
    ----------
    app_url
        Frontend base URL used to build verification and reset links
    verification_token_ttl
        Lifetime of VERIFY_EMAIL tokens
    password_reset_token_ttl
        Lifetime of PASSWORD_RESET tokens
    signup_issues_session
        Whether sign-up returns a session token before verification
    verify_email_issues_session
        Whether a successful email verification returns a session token
    password_reset_max_requests
        Reset requests allowed per user per window (0 disables the limit)
    password_reset_window
        Length of the reset rate-limit window
    """

    app_url: str = "http://localhost:3000"
    verification_token_ttl: timedelta = timedelta(hours=48)
    password_reset_token_ttl: timedelta = timedelta(hours=1)
    signup_issues_session: bool = True
    verify_email_issues_session: bool = False
    password_reset_max_requests: int = 3
    password_reset_window: timedelta = timedelta(minutes=60)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineConfig":
        return cls(
            app_url=settings.app_url.rstrip("/"),
            verification_token_ttl=timedelta(hours=settings.verification_token_ttl_hours),
            password_reset_token_ttl=timedelta(
                hours=settings.password_reset_token_ttl_hours,
            ),
            signup_issues_session=settings.signup_issues_session,
            verify_email_issues_session=settings.verify_email_issues_session,
            password_reset_max_requests=settings.password_reset_max_requests,
            password_reset_window=timedelta(
                minutes=settings.password_reset_window_minutes,
            ),
        )
