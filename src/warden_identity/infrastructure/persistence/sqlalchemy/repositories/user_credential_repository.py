"""Credential storage backed by the user_credentials table."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    UserCredentialModel,
)
from warden_identity.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        model = await self._session.get(UserCredentialModel, user_id)
        if model is None:
            model = UserCredentialModel(user_id=user_id, password_hash=password_hash)
            self._session.add(model)
            logger.info("Stored password for user %s", user_id)
        else:
            model.password_hash = password_hash
            logger.info("Replaced password for user %s", user_id)

        await self._session.flush()
        return UserCredentialData(user_id=model.user_id, password_hash=model.password_hash)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._session.get(UserCredentialModel, user_id)
        if model is None:
            return None
        return UserCredentialData(user_id=model.user_id, password_hash=model.password_hash)
