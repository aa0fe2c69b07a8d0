"""Users table access. Email uniqueness is enforced by the database."""

import logging
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.time import ensure_tz_aware
from warden_identity.domain.user import User
from warden_identity.exceptions import EmailAlreadyExistsError
from warden_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from warden_identity.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._session.get(UserModel, user_id)
        return self._to_domain(model) if model else None

    async def find_by_email(self, email: str) -> User | None:
        result = await self._session.scalars(select(UserModel).where(UserModel.email == email))
        model = result.first()
        return self._to_domain(model) if model else None

    async def exists_by_email(self, email: str) -> bool:
        return bool(await self._session.scalar(select(exists().where(UserModel.email == email))))

    async def save(self, user: User) -> None:
        model = await self._session.get(UserModel, user.id)
        if model is None:
            self._session.add(
                UserModel(
                    id=user.id,
                    email=user.email,
                    name=user.name,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                ),
            )
        else:
            model.email = user.email
            model.name = user.name
            model.updated_at = user.updated_at

        try:
            await self._session.flush()
        except IntegrityError as e:
            # users.email is the only unique column besides the primary key
            raise EmailAlreadyExistsError(user.email) from e
        logger.debug("Saved user %s", user.id)

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            name=model.name,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
