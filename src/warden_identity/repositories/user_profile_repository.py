"""Abstract repository interface for user profiles."""

from abc import ABC, abstractmethod
from uuid import UUID

from warden_identity.domain.user import Profile


class UserProfileRepository(ABC):
    """Abstract repository for verification and onboarding state."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> Profile | None:
        """Find the profile of a user."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Profile | None:
        """Find the profile holding a username."""

    @abstractmethod
    async def save(self, profile: Profile) -> None:
        """Create or update a profile.

        Raises
        ------
        UsernameTakenError
            If another profile already holds the username
        """
