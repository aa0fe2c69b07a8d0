"""SQLAlchemy model for user profiles."""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)


class UserProfileModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for verification and onboarding state."""

    __tablename__ = "user_profiles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    onboarding_complete: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    username: Mapped[str | None] = mapped_column(
        String(30),
        unique=True,
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<UserProfileModel(user_id={self.user_id}, "
            f"email_verified={self.email_verified})>"
        )
