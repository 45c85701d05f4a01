"""Shared repository base: lookup by primary key and single-row insert."""
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Queries common to every model.

    Household scoping is not applied here; subclasses add ``household_id``
    filters for anything a user can reach through the API.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: UUID) -> T | None:
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Insert, commit and reload server defaults (id, created_at)."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj
