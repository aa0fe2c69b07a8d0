"""
Helpers for HTTP-level tests.

Builds a Warden app over a private in-memory database with outgoing email
captured by RecordingEmailService.
"""

from collections.abc import Iterator

from fastapi.testclient import TestClient
from pydantic import SecretStr

from tests.shared.fixtures.database import make_memory_engine
from warden.presentation.api.app import create_app
from warden.presentation.api.dependencies import get_email_service
from warden.presentation.api.limiter import limiter
from warden_config.settings import Settings

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "Str0ng!Pass"
APP_URL = "http://localhost:3000"


class RecordingEmailService:
    """Stands in for the SMTP sender and keeps every link it was asked to send."""

    def __init__(self):
        self.verification_emails: list[tuple[str, str]] = []
        self.reset_emails: list[tuple[str, str]] = []

    def send_verification_email(self, to_email: str, verification_link: str) -> str:
        self.verification_emails.append((to_email, verification_link))
        return f"<verify-{len(self.verification_emails)}@warden.test>"

    def send_password_reset_email(self, to_email: str, reset_link: str) -> str:
        self.reset_emails.append((to_email, reset_link))
        return f"<reset-{len(self.reset_emails)}@warden.test>"

    @staticmethod
    def token_from(link: str) -> str:
        return link.split("token=", 1)[1]

    @property
    def last_verification_token(self) -> str:
        return self.token_from(self.verification_emails[-1][1])

    @property
    def last_reset_token(self) -> str:
        return self.token_from(self.reset_emails[-1][1])


def make_settings(**overrides) -> Settings:
    """Test settings: fast hashing, plain-HTTP cookies, boundary limits off."""
    values = {
        "jwt_secret_key": SecretStr("test-jwt-secret-for-testing-only"),
        "bcrypt_rounds": 4,  # Low rounds for fast tests
        "app_url": APP_URL,
        "api_debug": True,
        "api_cors_origins": APP_URL,
        "api_cookie_secure": False,  # Allow HTTP in tests
        "rate_limit_enabled": False,
        "smtp_enabled": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def running_client(
    settings: Settings,
    outbox: RecordingEmailService,
    **client_kwargs,
) -> Iterator[TestClient]:
    """Yield a started TestClient; resuming the generator shuts it down."""
    engine = make_memory_engine()
    app = create_app(settings=settings, db_engine=engine)
    app.dependency_overrides[get_email_service] = lambda: outbox
    limiter.reset()

    with TestClient(app, **client_kwargs) as client:
        yield client
        # Dispose inside the client's event loop, where the connection lives
        client.portal.call(engine.dispose)
