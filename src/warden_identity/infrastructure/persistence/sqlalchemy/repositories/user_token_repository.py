"""SQLAlchemy implementation of UserTokenRepository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.time import ensure_tz_aware
from warden_identity.domain.token import TokenType, UserToken
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    UserTokenModel,
)
from warden_identity.repositories import UserTokenRepository


class UserTokenRepositorySQLAlchemy(UserTokenRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, token: UserToken) -> None:
        model = UserTokenModel(
            id=token.id,
            user_id=token.user_id,
            type=token.type.value,
            token=token.token,
            expires_at=token.expires_at,
            token_metadata=token.metadata,
            created_at=token.created_at,
        )
        self._session.add(model)
        await self._session.flush()

    async def find_by_value(
        self,
        value: str,
        token_type: TokenType,
    ) -> UserToken | None:
        stmt = select(UserTokenModel).where(
            UserTokenModel.token == value,
            UserTokenModel.type == token_type.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_valid_for_user(
        self,
        user_id: UUID,
        token_type: TokenType,
        now: datetime,
    ) -> UserToken | None:
        stmt = (
            select(UserTokenModel)
            .where(
                UserTokenModel.user_id == user_id,
                UserTokenModel.type == token_type.value,
                UserTokenModel.expires_at > now,
            )
            .order_by(UserTokenModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def consume(self, token_id: UUID) -> bool:
        # The row count picks the single winner when two requests race
        stmt = (
            delete(UserTokenModel)
            .where(UserTokenModel.id == token_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def delete_all_for_user(self, user_id: UUID, token_type: TokenType) -> int:
        stmt = (
            delete(UserTokenModel)
            .where(
                UserTokenModel.user_id == user_id,
                UserTokenModel.type == token_type.value,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def cleanup_expired(self, now: datetime) -> int:
        stmt = (
            delete(UserTokenModel)
            .where(UserTokenModel.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    def _map_to_domain(self, model: UserTokenModel) -> UserToken:
        return UserToken(
            id=model.id,
            user_id=model.user_id,
            type=TokenType(model.type),
            token=model.token,
            expires_at=ensure_tz_aware(model.expires_at),
            metadata=model.token_metadata,
            created_at=ensure_tz_aware(model.created_at),
        )
