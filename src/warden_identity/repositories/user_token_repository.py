"""Abstract repository interface for single-use tokens."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from warden_identity.domain.token import TokenType, UserToken


class UserTokenRepository(ABC):
    """Abstract repository for email verification and password reset tokens."""

    @abstractmethod
    async def create(self, token: UserToken) -> None:
        """Persist a newly issued token.

        Parameters
        ----------
        token
            The token to store
        """

    @abstractmethod
    async def find_by_value(
        self,
        value: str,
        token_type: TokenType,
    ) -> UserToken | None:
        """Find a token by its value and type, expired or not.

        Parameters
        ----------
        value
            The token value handed to the user
        token_type
            The purpose the token must have been issued for

        Returns
        -------
        Token if found, None otherwise
        """

    @abstractmethod
    async def find_valid_for_user(
        self,
        user_id: UUID,
        token_type: TokenType,
        now: datetime,
    ) -> UserToken | None:
        """Find an unexpired token of a type for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        token_type
            Token purpose
        now
            Reference time for the expiry check

        Returns
        -------
        The most recently created valid token, or None
        """

    @abstractmethod
    async def consume(self, token_id: UUID) -> bool:
        """Delete a token if it still exists.

        Parameters
        ----------
        token_id
            The token's unique identifier

        Returns
        -------
        True if this call deleted the token, False if it was already gone
        """

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID, token_type: TokenType) -> int:
        """Delete every token of a type for a user.

        Returns
        -------
        Number of tokens deleted
        """

    @abstractmethod
    async def cleanup_expired(self, now: datetime) -> int:
        """Remove expired tokens from the store.

        Returns
        -------
        Number of tokens deleted
        """
