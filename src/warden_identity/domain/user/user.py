"""User aggregate for identity concerns only."""

from datetime import datetime
from uuid import UUID, uuid4

from warden_identity.domain.time import utc_now


class User:
    """
    User aggregate root.

    The email is stored exactly as supplied; two addresses differing only in
    case are distinct users. Users are never deleted by the auth engine.
    """

    def __init__(
        self,
        email: str,
        name: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email
        self._name = name
        self._id = id or uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @classmethod
    def create(cls, email: str, name: str | None = None) -> "User":
        return cls(email=email, name=name)

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        email: str,
        name: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            name=name,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email})"
