"""Pytest fixtures for API integration tests.

Every test gets its own application over a fresh in-memory SQLite
database. Outgoing email is captured instead of sent.
"""

from contextlib import ExitStack, contextmanager

import pytest

from tests.shared.fixtures.api import (
    TEST_EMAIL,
    TEST_PASSWORD,
    RecordingEmailService,
    make_settings,
    running_client,
)
from warden_config.settings import Settings


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and boundary limits off."""
    return make_settings()


@pytest.fixture
def email_outbox() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def test_client(api_settings, email_outbox):
    """Create a test client over a fresh in-memory database."""
    yield from running_client(api_settings, email_outbox)


@pytest.fixture
def client_factory(email_outbox):
    """Build clients with custom settings; all are shut down after the test."""
    with ExitStack() as stack:

        def _make(client_kwargs: dict | None = None, **overrides):
            client = contextmanager(running_client)(
                make_settings(**overrides),
                email_outbox,
                **(client_kwargs or {}),
            )
            return stack.enter_context(client)

        yield _make


@pytest.fixture
def signed_up(test_client) -> dict:
    """Register TEST_EMAIL and return the sign-up response body."""
    response = test_client.post(
        "/auth/sign-up",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def verified_user(test_client, email_outbox, signed_up) -> dict:
    """Register and verify TEST_EMAIL; returns the sign-in response body."""
    response = test_client.post(
        "/auth/verify-email",
        json={"token": email_outbox.last_verification_token},
    )
    assert response.status_code == 200

    test_client.cookies.clear()
    response = test_client.post(
        "/auth/sign-in",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()
