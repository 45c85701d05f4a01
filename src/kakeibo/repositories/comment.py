"""Comment repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.comment import Comment
from kakeibo.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Comment)

    async def get_for_scope(
        self, household_id: UUID, scope_key: str, scope_type: str = "month"
    ) -> list[Comment]:
        """Comments for one scope, newest first."""
        result = await self.db.execute(
            select(Comment)
            .where(
                Comment.household_id == household_id,
                Comment.scope_type == scope_type,
                Comment.scope_key == scope_key,
            )
            .order_by(Comment.created_at.desc())
        )
        return list(result.scalars().all())
