"""Transaction repository with household-scoped queries."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.models.category import Category
from kakeibo.models.statement import Statement
from kakeibo.models.transaction import Transaction
from kakeibo.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_household(
        self, household_id: UUID, transaction_id: UUID
    ) -> Transaction | None:
        """Get transaction only if it belongs to the specified household."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id, Transaction.household_id == household_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_statement(
        self, household_id: UUID, statement_id: UUID, ownership_tag: str | None = None
    ) -> list[Transaction]:
        """Transactions of one statement, oldest posting date first."""
        query = select(Transaction).where(
            Transaction.household_id == household_id,
            Transaction.statement_id == statement_id,
        )
        if ownership_tag:
            query = query.where(Transaction.ownership_tag == ownership_tag)
        query = query.order_by(Transaction.posting_date.asc(), Transaction.created_at.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def bulk_insert(self, transactions: list[Transaction]) -> None:
        """Insert one batch and commit it."""
        self.db.add_all(transactions)
        await self.db.commit()

    async def get_aggregation_rows(self, household_id: UUID) -> list:
        """Rows of (amount, ownership_tag, year, month, posting_date, category name)."""
        result = await self.db.execute(
            select(
                Transaction.amount,
                Transaction.ownership_tag,
                Statement.year,
                Statement.month,
                Transaction.posting_date,
                Category.name,
            )
            .join(Statement, Transaction.statement_id == Statement.id)
            .outerjoin(Category, Transaction.category_id == Category.id)
            .where(Transaction.household_id == household_id)
        )
        return list(result.all())
