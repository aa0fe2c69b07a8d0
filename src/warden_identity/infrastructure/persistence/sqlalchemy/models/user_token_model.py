"""SQLAlchemy model for single-use tokens."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden_identity.domain.time import utc_now
from warden_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class UserTokenModel(IdentityBase):
    """SQLAlchemy model for email verification and password reset tokens."""

    __tablename__ = "user_tokens"
    __table_args__ = (Index("ix_user_tokens_user_id_type", "user_id", "type"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    token: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    # "metadata" is reserved on declarative classes
    token_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<UserTokenModel(id={self.id}, user_id={self.user_id}, type={self.type})>"
