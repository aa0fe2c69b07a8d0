"""SQLAlchemy implementation of UserProfileRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.user import Profile
from warden_identity.exceptions import UsernameTakenError
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    UserProfileModel,
)
from warden_identity.repositories import UserProfileRepository

logger = logging.getLogger(__name__)


class UserProfileRepositorySQLAlchemy(UserProfileRepository):
    """SQLAlchemy implementation of UserProfileRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_user_id(self, user_id: UUID) -> Profile | None:
        stmt = select(UserProfileModel).where(UserProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_username(self, username: str) -> Profile | None:
        stmt = select(UserProfileModel).where(UserProfileModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def save(self, profile: Profile) -> None:
        stmt = select(UserProfileModel).where(
            UserProfileModel.user_id == profile.user_id,
        )
        result = await self._session.execute(stmt)
        existing = result.scalar_one_or_none()

        try:
            if existing:
                existing.email_verified = profile.email_verified
                existing.onboarding_complete = profile.onboarding_complete
                existing.username = profile.username
                logger.debug("Updated profile for user: %s", profile.user_id)
            else:
                self._session.add(
                    UserProfileModel(
                        user_id=profile.user_id,
                        email_verified=profile.email_verified,
                        onboarding_complete=profile.onboarding_complete,
                        username=profile.username,
                    ),
                )
                logger.debug("Created profile for user: %s", profile.user_id)

            await self._session.flush()
        except IntegrityError as e:
            if profile.username and "username" in str(e).lower():
                raise UsernameTakenError(profile.username) from e
            raise

    def _map_to_domain(self, model: UserProfileModel) -> Profile:
        return Profile(
            user_id=model.user_id,
            email_verified=model.email_verified,
            onboarding_complete=model.onboarding_complete,
            username=model.username,
        )
