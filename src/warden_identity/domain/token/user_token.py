"""Single-use, time-bounded token entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from warden_identity.domain.time import utc_now
from warden_identity.domain.token.token_type import TokenType


@dataclass(frozen=True)
class UserToken:
    """A token that authorizes exactly one action before it expires.

    Redeeming a token deletes it. Expired tokens authorize nothing, even
    while they still exist in the store.
    """

    user_id: UUID
    type: TokenType
    token: str
    expires_at: datetime
    metadata: dict[str, Any] | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def issue(
        cls,
        user_id: UUID,
        token_type: TokenType,
        value: str,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "UserToken":
        issued_at = now or utc_now()
        return cls(
            user_id=user_id,
            type=token_type,
            token=value,
            expires_at=issued_at + ttl,
            created_at=issued_at,
        )

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired."""
        return now > self.expires_at
