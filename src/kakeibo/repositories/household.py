"""Household and membership repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.household import Household, HouseholdMember
from kakeibo.repositories.base import BaseRepository


class HouseholdRepository(BaseRepository[Household]):
    """Repository for households and the users_households membership table."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Household)

    async def get_membership(self, user_id: UUID) -> HouseholdMember | None:
        """Return the user's (first) household membership."""
        result = await self.db.execute(
            select(HouseholdMember)
            .where(HouseholdMember.user_id == user_id)
            .order_by(HouseholdMember.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, household_id: UUID, name: str) -> Household:
        """Fetch a household by its fixed ID, creating it on first use."""
        household = await self.get_by_id(household_id)
        if household is None:
            household = Household(id=household_id, name=name)
            self.db.add(household)
            await self.db.flush()
        return household

    async def add_member(
        self, user_id: UUID, household_id: UUID, role: str = "member"
    ) -> HouseholdMember:
        member = HouseholdMember(user_id=user_id, household_id=household_id, role=role)
        self.db.add(member)
        await self.db.flush()
        return member

