"""Transaction listing and ownership re-tagging."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.exceptions import NotFoundError, RemoteQueryError
from kakeibo.models.transaction import OwnershipTag, Transaction
from kakeibo.repositories.statement import StatementRepository
from kakeibo.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.statement_repo = StatementRepository(db)
        self.transaction_repo = TransactionRepository(db)

    async def list_for_statement(
        self, household_id: UUID, statement_id: UUID, tag: OwnershipTag | None = None
    ) -> tuple[list[Transaction], Decimal]:
        """Transactions of one statement with their summed amount.

        Raises:
            NotFoundError: If the statement is not in the household (API_003)
        """
        statement = await self.statement_repo.get_by_household(household_id, statement_id)
        if statement is None:
            raise NotFoundError("API_003")

        transactions = await self.transaction_repo.get_by_statement(
            household_id, statement_id, tag.value if tag else None
        )
        total = sum((Decimal(t.amount or 0) for t in transactions), Decimal("0"))
        return transactions, total

    async def set_ownership_tag(
        self, household_id: UUID, transaction_id: UUID, tag: OwnershipTag
    ) -> Transaction:
        """Persist a new ownership tag. Last write wins.

        Raises:
            NotFoundError: If the transaction is not in the household (API_004)
            RemoteQueryError: If the update is rejected
        """
        txn = await self.transaction_repo.get_by_household(household_id, transaction_id)
        if txn is None:
            raise NotFoundError("API_004")

        txn.ownership_tag = tag.value
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Tag update failed", extra={"transaction_id": str(transaction_id)})
            raise RemoteQueryError(
                "DB_001", {"backend_message": str(getattr(e, "orig", None) or e)}
            ) from e

        await self.db.refresh(txn)
        return txn
