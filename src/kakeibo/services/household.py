"""Household membership resolution."""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.config import settings
from kakeibo.core.exceptions import RemoteQueryError
from kakeibo.repositories.household import HouseholdRepository

logger = logging.getLogger(__name__)


class HouseholdService:
    """Finds the household whose records a user may read and write."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.household_repo = HouseholdRepository(db)

    @property
    def shared_household_id(self) -> UUID:
        return UUID(settings.shared_household_id)

    async def join_shared_household(self, user_id: UUID, role: str = "member") -> UUID:
        """Add the user to the shared household (no commit)."""
        household = await self.household_repo.get_or_create(
            self.shared_household_id, settings.shared_household_name
        )
        await self.household_repo.add_member(user_id, household.id, role=role)
        return household.id

    async def resolve_household_id(self, user_id: UUID) -> UUID:
        """Return the user's household, joining the shared one when there is none.

        Raises:
            RemoteQueryError: If the membership could not be created.
        """
        membership = await self.household_repo.get_membership(user_id)
        if membership is not None:
            return membership.household_id

        logger.info("No household membership, joining shared household", extra={"user_id": str(user_id)})
        try:
            household_id = await self.join_shared_household(user_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteQueryError(
                "HH_001", {"backend_message": str(getattr(e, "orig", None) or e)}
            ) from e
        return household_id
