"""Integration tests for the user, credential and profile repositories."""

from uuid import UUID, uuid4

import pytest

from warden_identity.domain.user import Profile, User
from warden_identity.exceptions import EmailAlreadyExistsError, UsernameTakenError
from warden_identity.infrastructure.persistence.sqlalchemy import (
    UserCredentialRepositorySQLAlchemy,
    UserProfileRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "test@example.com"


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


@pytest.fixture
def credential_repo(db_session):
    return UserCredentialRepositorySQLAlchemy(db_session)


@pytest.fixture
def profile_repo(db_session):
    return UserProfileRepositorySQLAlchemy(db_session)


@pytest.mark.integration
class TestUserRepositorySQLAlchemy:
    """Integration tests for UserRepositorySQLAlchemy."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, user_repo):
        """Can save and retrieve a user by ID."""
        user = User.create(TEST_EMAIL, name="Ada")

        await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert isinstance(found.id, UUID)
        assert found.id == user.id
        assert found.email == TEST_EMAIL
        assert found.name == "Ada"
        assert found.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_email_exact_match(self, user_repo):
        """Emails are stored and matched exactly as given."""
        await user_repo.save(User.create("Mixed@Example.com"))

        assert await user_repo.find_by_email("Mixed@Example.com") is not None
        assert await user_repo.find_by_email("mixed@example.com") is None

    @pytest.mark.asyncio
    async def test_exists_by_email(self, user_repo):
        assert not await user_repo.exists_by_email(TEST_EMAIL)

        await user_repo.save(User.create(TEST_EMAIL))

        assert await user_repo.exists_by_email(TEST_EMAIL)

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self, user_repo):
        await user_repo.save(User.create(TEST_EMAIL))

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.save(User.create(TEST_EMAIL))


@pytest.mark.integration
class TestUserCredentialRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_replace(self, user_repo, credential_repo):
        user = User.create(TEST_EMAIL)
        await user_repo.save(user)

        await credential_repo.save(user_id=user.id, password_hash="hash-1")
        await credential_repo.save(user_id=user.id, password_hash="hash-2")
        found = await credential_repo.find_by_user_id(user.id)

        assert found is not None
        assert found.password_hash == "hash-2"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, credential_repo):
        assert await credential_repo.find_by_user_id(uuid4()) is None


@pytest.mark.integration
class TestUserProfileRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_update(self, user_repo, profile_repo):
        user = User.create(TEST_EMAIL)
        await user_repo.save(user)
        profile = Profile(user_id=user.id)
        await profile_repo.save(profile)

        await profile_repo.save(profile.mark_email_verified().complete_onboarding("ada"))
        found = await profile_repo.find_by_user_id(user.id)

        assert found.email_verified
        assert found.onboarding_complete
        assert found.username == "ada"
        assert (await profile_repo.find_by_username("ada")).user_id == user.id

    @pytest.mark.asyncio
    async def test_username_unique(self, user_repo, profile_repo):
        first = User.create("one@example.com")
        second = User.create("two@example.com")
        await user_repo.save(first)
        await user_repo.save(second)
        await profile_repo.save(Profile(user_id=first.id, username="ada"))

        with pytest.raises(UsernameTakenError):
            await profile_repo.save(Profile(user_id=second.id, username="ada"))
