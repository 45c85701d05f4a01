"""Month comments and household categories."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.exceptions import LocalValidationError, RemoteQueryError
from kakeibo.models.category import Category
from kakeibo.models.comment import Comment
from kakeibo.repositories.category import CategoryRepository
from kakeibo.repositories.comment import CommentRepository
from kakeibo.services.analytics import validate_year_month

MONTH_SCOPE = "month"


class CommentService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.comment_repo = CommentRepository(db)
        self.category_repo = CategoryRepository(db)

    async def list_for_month(self, household_id: UUID, year_month: str) -> list[Comment]:
        validate_year_month(year_month)
        return await self.comment_repo.get_for_scope(household_id, year_month, MONTH_SCOPE)

    async def add(
        self, household_id: UUID, user_id: UUID, year_month: str, content: str
    ) -> Comment:
        """Add a trimmed, non-empty comment to a month.

        Raises:
            LocalValidationError: If the content is blank (VAL_004)
        """
        validate_year_month(year_month)
        content = (content or "").strip()
        if not content:
            raise LocalValidationError("VAL_004")

        comment = Comment(
            household_id=household_id,
            scope_type=MONTH_SCOPE,
            scope_key=year_month,
            content=content,
            created_by=user_id,
        )
        try:
            return await self.comment_repo.create(comment)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteQueryError(
                "DB_001", {"backend_message": str(getattr(e, "orig", None) or e)}
            ) from e

    async def list_categories(self, household_id: UUID) -> list[Category]:
        return await self.category_repo.get_all_by_household(household_id)
