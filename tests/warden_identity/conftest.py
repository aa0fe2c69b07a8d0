"""
Pytest configuration for warden_identity tests.

Fixtures for users, profiles and tokens shared by unit and integration
tests.
"""

from datetime import timedelta

import pytest

from warden_identity.domain.time import utc_now
from warden_identity.domain.token import TokenType, UserToken
from warden_identity.domain.user import Profile, User

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "Str0ng!Pass"


@pytest.fixture
def test_user() -> User:
    """Create a standard test user."""
    return User.create(TEST_EMAIL, name="Test User")


@pytest.fixture
def verified_profile(test_user) -> Profile:
    """Profile of test_user with a confirmed email."""
    return Profile(user_id=test_user.id, email_verified=True)


@pytest.fixture
def unverified_profile(test_user) -> Profile:
    return Profile(user_id=test_user.id)


@pytest.fixture
def verification_token(test_user) -> UserToken:
    """A fresh VERIFY_EMAIL token for test_user."""
    return UserToken.issue(
        user_id=test_user.id,
        token_type=TokenType.VERIFY_EMAIL,
        value="0b9c6f7e-2c3d-4e5f-8a9b-0c1d2e3f4a5b",
        ttl=timedelta(hours=48),
    )


@pytest.fixture
def reset_token(test_user) -> UserToken:
    """A fresh PASSWORD_RESET token for test_user."""
    return UserToken.issue(
        user_id=test_user.id,
        token_type=TokenType.PASSWORD_RESET,
        value="5a4b3c2d-1e0f-4a9b-8c7d-6e5f4a3b2c1d",
        ttl=timedelta(hours=1),
        now=utc_now(),
    )
