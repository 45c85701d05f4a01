"""Spending charts for a household."""

import re
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.analytics import (
    AggregationRow,
    CategoryAggregate,
    MonthlyAggregate,
    aggregate_by_category,
    aggregate_monthly,
    latest_year_month,
)
from kakeibo.core.exceptions import LocalValidationError
from kakeibo.repositories.transaction import TransactionRepository

YEAR_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_year_month(year_month: str) -> str:
    if not YEAR_MONTH_PATTERN.match(year_month):
        raise LocalValidationError("API_005", {"year_month": year_month})
    return year_month


class AnalyticsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    async def _rows(self, household_id: UUID) -> list[AggregationRow]:
        raw = await self.transaction_repo.get_aggregation_rows(household_id)
        return [
            AggregationRow(
                amount=amount,
                ownership_tag=tag,
                year=year,
                month=month,
                posting_date=posting_date,
                category=category,
            )
            for amount, tag, year, month, posting_date, category in raw
        ]

    async def monthly(self, household_id: UUID) -> list[MonthlyAggregate]:
        return aggregate_monthly(await self._rows(household_id))

    async def by_category(
        self, household_id: UUID, year_month: str | None = None
    ) -> tuple[str | None, list[CategoryAggregate]]:
        """Category breakdown of a month; defaults to the latest month with data."""
        rows = await self._rows(household_id)
        if year_month is None:
            year_month = latest_year_month(aggregate_monthly(rows))
            if year_month is None:
                return None, []
        else:
            validate_year_month(year_month)
        return year_month, aggregate_by_category(rows, year_month)
