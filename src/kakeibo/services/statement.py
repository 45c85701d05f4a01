"""Statement ingestion service.

This module orchestrates a CSV statement upload:
1. Decode and parse the file
2. Validate year/month and that rows were found
3. Replace any statement for the same (year, month, source)
4. Insert the statement row
5. Insert transactions in sequential batches

A failing batch stops the upload. Batches committed before it stay in the
database, so a statement can end up partially inserted; re-uploading the same
file replaces it.
"""

import logging
import time
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.config import settings
from kakeibo.core.exceptions import LocalValidationError, RemoteQueryError
from kakeibo.models.statement import Statement
from kakeibo.models.transaction import OwnershipTag, Transaction
from kakeibo.parsers import decode_statement_bytes, detect_year_month, parse_statement_csv
from kakeibo.repositories.category import CategoryRepository
from kakeibo.repositories.statement import StatementRepository
from kakeibo.repositories.transaction import TransactionRepository
from kakeibo.schemas.internal import ParsedRow
from kakeibo.schemas.statement import (
    ParsedRowResponse,
    StatementPreviewResult,
    StatementUploadResult,
)

logger = logging.getLogger(__name__)


def _backend_message(e: SQLAlchemyError) -> str:
    return str(getattr(e, "orig", None) or e)


def chunked(rows: list, size: int) -> list[list]:
    """Split rows into consecutive batches of at most ``size``."""
    if size < 1:
        raise ValueError("Batch size must be positive")
    return [rows[i : i + size] for i in range(0, len(rows), size)]


class StatementService:
    """Service for turning uploaded CSV files into statements and transactions."""

    def __init__(self, db: AsyncSession, batch_size: int | None = None):
        self.db = db
        self.batch_size = batch_size or settings.upload_batch_size
        self.statement_repo = StatementRepository(db)
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    def parse(self, data: bytes) -> list[ParsedRow]:
        """Decode and parse an uploaded file.

        Raises:
            LocalValidationError: If the file is empty (VAL_001) or not text (VAL_005)
        """
        if not data:
            raise LocalValidationError("VAL_001")
        try:
            text = decode_statement_bytes(data)
        except UnicodeDecodeError as e:
            raise LocalValidationError("VAL_005") from e
        return parse_statement_csv(text)

    def preview(self, data: bytes, filename: str | None = None) -> StatementPreviewResult:
        """Parse a file without storing anything."""
        rows = self.parse(data)
        detected = detect_year_month(filename)
        return StatementPreviewResult(
            rows=[ParsedRowResponse.model_validate(r, from_attributes=True) for r in rows],
            rows_count=len(rows),
            total_amount=sum((r.amount for r in rows), Decimal("0")),
            detected_year=detected[0] if detected else None,
            detected_month=detected[1] if detected else None,
        )

    async def upload(
        self,
        data: bytes,
        household_id: UUID,
        user_id: UUID,
        filename: str | None = None,
        year: int | None = None,
        month: int | None = None,
        source: str | None = None,
    ) -> StatementUploadResult:
        """Ingest a statement file.

        Args:
            data: Raw file content
            household_id: Household that owns the statement
            user_id: Uploading user
            filename: Original filename; may carry the month as ``YYYYMM``
            year: Statement year (overrides the filename)
            month: Statement month (overrides the filename)
            source: Card / statement source, defaults to ``settings.default_source``

        Raises:
            LocalValidationError: Missing file, year/month, or parsable rows
            RemoteQueryError: If the database rejects any step
        """
        start_time = time.time()

        rows = self.parse(data)
        detected = detect_year_month(filename)
        if detected:
            year = year or detected[0]
            month = month or detected[1]
        if not year or not month or not 1 <= month <= 12:
            raise LocalValidationError("VAL_002", {"year": year, "month": month})
        if not rows:
            raise LocalValidationError("VAL_003")

        source = (source or "").strip() or settings.default_source

        statement, replaced_id = await self._replace_statement(
            household_id, user_id, year, month, source, filename, rows
        )
        categories = await self._resolve_categories(household_id, rows)
        inserted = await self._insert_transactions(statement, rows, categories)

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Statement uploaded",
            extra={
                "statement_id": str(statement.id),
                "transactions_count": inserted,
                "replaced": replaced_id is not None,
            },
        )
        return StatementUploadResult(
            statement_id=statement.id,
            year=year,
            month=month,
            source=source,
            transactions_count=inserted,
            replaced_statement_id=replaced_id,
            processing_time_ms=processing_time_ms,
        )

    async def _replace_statement(
        self,
        household_id: UUID,
        user_id: UUID,
        year: int,
        month: int,
        source: str,
        filename: str | None,
        rows: list[ParsedRow],
    ) -> tuple[Statement, UUID | None]:
        """Delete any previous statement for the triple and insert the new one."""
        replaced_id = None
        try:
            existing = await self.statement_repo.get_by_period(household_id, year, month, source)
            if existing is not None:
                replaced_id = existing.id
                logger.info("Replacing existing statement", extra={"statement_id": str(existing.id)})
                await self.statement_repo.delete_with_transactions(existing.id)

            statement = Statement(
                household_id=household_id,
                year=year,
                month=month,
                source=source,
                original_filename=filename,
                uploaded_by=user_id,
            )
            self.db.add(statement)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Statement insert failed", extra={"error_type": type(e).__name__})
            raise RemoteQueryError("DB_001", {"backend_message": _backend_message(e)}) from e
        return statement, replaced_id

    async def _resolve_categories(
        self, household_id: UUID, rows: list[ParsedRow]
    ) -> dict[str, UUID]:
        names = {r.category_raw.strip() for r in rows if r.category_raw.strip()}
        try:
            mapping = await self.category_repo.resolve_names(household_id, names)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Category lookup failed", extra={"error_type": type(e).__name__})
            raise RemoteQueryError("DB_001", {"backend_message": _backend_message(e)}) from e
        return mapping

    async def _insert_transactions(
        self, statement: Statement, rows: list[ParsedRow], categories: dict[str, UUID]
    ) -> int:
        """Insert rows in batches; stop at the first failing batch."""
        inserted = 0
        batches = chunked(rows, self.batch_size)
        for index, batch in enumerate(batches):
            payload = [
                Transaction(
                    statement_id=statement.id,
                    household_id=statement.household_id,
                    category_id=categories.get(row.category_raw.strip()),
                    posting_date=row.date,
                    amount=row.amount,
                    description=row.merchant,
                    raw_merchant=row.merchant,
                    ownership_tag=OwnershipTag.SHARED.value,
                )
                for row in batch
            ]
            try:
                await self.transaction_repo.bulk_insert(payload)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(
                    "Transaction batch insert failed",
                    extra={
                        "statement_id": str(statement.id),
                        "batch": index,
                        "batches": len(batches),
                        "inserted": inserted,
                        "error_type": type(e).__name__,
                    },
                )
                raise RemoteQueryError(
                    "DB_001",
                    {
                        "backend_message": _backend_message(e),
                        "statement_id": str(statement.id),
                        "inserted_transactions": inserted,
                    },
                ) from e
            inserted += len(batch)
        return inserted

    async def list_statements(self, household_id: UUID) -> list[tuple[Statement, int]]:
        statements = await self.statement_repo.get_all_by_household(household_id)
        counts = await self.statement_repo.count_transactions([s.id for s in statements])
        return [(s, counts.get(s.id, 0)) for s in statements]

    async def delete_statement(self, household_id: UUID, statement_id: UUID) -> bool:
        """Delete a statement and its transactions. Returns False if not found."""
        statement = await self.statement_repo.get_by_household(household_id, statement_id)
        if statement is None:
            return False
        try:
            await self.statement_repo.delete_with_transactions(statement.id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteQueryError("DB_001", {"backend_message": _backend_message(e)}) from e
        return True
