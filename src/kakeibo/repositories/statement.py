"""Statement repository with household-scoped queries."""
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.statement import Statement
from kakeibo.models.transaction import Transaction
from kakeibo.repositories.base import BaseRepository


class StatementRepository(BaseRepository[Statement]):
    """Repository for Statement model; every query is limited to one household."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Statement)

    async def get_by_household(self, household_id: UUID, statement_id: UUID) -> Statement | None:
        """Get statement only if it belongs to the specified household."""
        result = await self.db.execute(
            select(Statement).where(
                Statement.id == statement_id, Statement.household_id == household_id
            )
        )
        return result.scalar_one_or_none()

    async def get_all_by_household(self, household_id: UUID) -> list[Statement]:
        """All statements, newest month first."""
        result = await self.db.execute(
            select(Statement)
            .where(Statement.household_id == household_id)
            .order_by(Statement.year.desc(), Statement.month.desc(), Statement.source.asc())
        )
        return list(result.scalars().all())

    async def get_by_period(
        self, household_id: UUID, year: int, month: int, source: str
    ) -> Statement | None:
        """Find the statement for a (year, month, source) triple."""
        result = await self.db.execute(
            select(Statement).where(
                Statement.household_id == household_id,
                Statement.year == year,
                Statement.month == month,
                Statement.source == source,
            )
        )
        return result.scalar_one_or_none()

    async def count_transactions(self, statement_ids: list[UUID]) -> dict[UUID, int]:
        """Transaction counts per statement."""
        if not statement_ids:
            return {}
        result = await self.db.execute(
            select(Transaction.statement_id, func.count(Transaction.id))
            .where(Transaction.statement_id.in_(statement_ids))
            .group_by(Transaction.statement_id)
        )
        return {row[0]: int(row[1]) for row in result}

    async def delete_with_transactions(self, statement_id: UUID) -> None:
        """Hard delete a statement and its transactions (no commit).

        Transactions are deleted explicitly so the result does not depend on
        the database enforcing ON DELETE CASCADE.
        """
        await self.db.execute(delete(Transaction).where(Transaction.statement_id == statement_id))
        await self.db.execute(delete(Statement).where(Statement.id == statement_id))
