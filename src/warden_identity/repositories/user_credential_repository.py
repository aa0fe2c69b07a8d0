"""Abstract repository interface for user credentials."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    """Immutable credential data. Never leaves the identity package."""

    user_id: UUID
    password_hash: str


class UserCredentialRepository(ABC):
    """Abstract repository for password credentials (1:1 with users)."""

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        """Create or replace the credentials of a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        password_hash
            The bcrypt hash of the password

        Returns
        -------
        The stored credential data
        """

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        """Find credentials by user ID.

        Parameters
        ----------
        user_id
            The user's unique identifier

        Returns
        -------
        Credential data if found, None otherwise
        """
