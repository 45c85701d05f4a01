"""Category repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.category import Category
from kakeibo.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_all_by_household(self, household_id: UUID) -> list[Category]:
        result = await self.db.execute(
            select(Category).where(Category.household_id == household_id).order_by(Category.name)
        )
        return list(result.scalars().all())

    async def resolve_names(self, household_id: UUID, names: set[str]) -> dict[str, UUID]:
        """Map category names to IDs, creating the missing ones (no commit)."""
        if not names:
            return {}
        result = await self.db.execute(
            select(Category).where(
                Category.household_id == household_id, Category.name.in_(sorted(names))
            )
        )
        mapping = {c.name: c.id for c in result.scalars().all()}
        for name in sorted(names - mapping.keys()):
            category = Category(household_id=household_id, name=name)
            self.db.add(category)
            await self.db.flush()
            mapping[name] = category.id
        return mapping
