"""Auth schemas and data structures."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    email
        The user's email address at issuance time
    exp
        Token expiration timestamp
    iat
        Token issuance timestamp
    """

    user_id: UUID
    email: str
    exp: datetime
    iat: datetime

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp
