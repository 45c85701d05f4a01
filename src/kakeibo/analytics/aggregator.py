"""Pure functions grouping tagged transactions into chart series.

- No I/O operations (no database, no HTTP)
- No side effects
- Output depends only on the multiset of input rows, never on their order

Amounts are Decimal; a missing or non-numeric amount counts as zero. Any tag other than
"papa" or "mama" (including None) is counted as shared.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from kakeibo.models.transaction import OwnershipTag

UNCATEGORIZED = "uncategorized"

ZERO = Decimal("0")


@dataclass(frozen=True)
class AggregationRow:
    """Minimal view of a transaction needed for aggregation.

    ``year``/``month`` come from the owning statement (the billing month);
    ``posting_date`` is used when they are missing.
    """

    amount: Decimal | int | float | str | None
    ownership_tag: str | None = None
    year: int | None = None
    month: int | None = None
    posting_date: date | None = None
    category: str | None = None


@dataclass
class _Buckets:
    total: Decimal = ZERO
    papa: Decimal = ZERO
    mama: Decimal = ZERO
    shared: Decimal = ZERO

    def add(self, amount: Decimal, tag: str | None) -> None:
        self.total += amount
        if tag == OwnershipTag.PAPA.value:
            self.papa += amount
        elif tag == OwnershipTag.MAMA.value:
            self.mama += amount
        else:
            self.shared += amount


@dataclass(frozen=True)
class MonthlyAggregate:
    """Totals for one year-month."""

    year_month: str
    total: Decimal = ZERO
    papa: Decimal = ZERO
    mama: Decimal = ZERO
    shared: Decimal = ZERO


@dataclass(frozen=True)
class CategoryAggregate:
    """Totals for one category within a month."""

    category: str
    total: Decimal = ZERO
    papa: Decimal = ZERO
    mama: Decimal = ZERO
    shared: Decimal = ZERO


def to_amount(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce an amount to Decimal; None and non-numeric strings count as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value) if isinstance(value, float) else value)
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def year_month_key(row: AggregationRow) -> str | None:
    """Return ``YYYY-MM`` for a row, or None if it has no month at all."""
    if row.year is not None and row.month is not None:
        return f"{row.year:04d}-{row.month:02d}"
    if row.posting_date is not None:
        return f"{row.posting_date.year:04d}-{row.posting_date.month:02d}"
    return None


def aggregate_monthly(rows: Iterable[AggregationRow]) -> list[MonthlyAggregate]:
    """Group rows by year-month.

    Returns:
        One MonthlyAggregate per month, ascending by key.
    """
    buckets: dict[str, _Buckets] = {}
    for row in rows:
        key = year_month_key(row)
        if key is None:
            continue
        buckets.setdefault(key, _Buckets()).add(to_amount(row.amount), row.ownership_tag)

    return [
        MonthlyAggregate(year_month=key, total=b.total, papa=b.papa, mama=b.mama, shared=b.shared)
        for key, b in sorted(buckets.items())
    ]


def aggregate_by_category(
    rows: Iterable[AggregationRow], year_month: str
) -> list[CategoryAggregate]:
    """Break one month down by category label.

    Returns:
        One CategoryAggregate per category, largest total first. Ties are
        ordered by label so the result does not depend on input order.
    """
    buckets: dict[str, _Buckets] = {}
    for row in rows:
        if year_month_key(row) != year_month:
            continue
        label = (row.category or "").strip() or UNCATEGORIZED
        buckets.setdefault(label, _Buckets()).add(to_amount(row.amount), row.ownership_tag)

    ordered = sorted(buckets.items(), key=lambda item: (-item[1].total, item[0]))
    return [
        CategoryAggregate(category=label, total=b.total, papa=b.papa, mama=b.mama, shared=b.shared)
        for label, b in ordered
    ]


def latest_year_month(aggregates: list[MonthlyAggregate]) -> str | None:
    """Most recent month in an ascending monthly series."""
    return aggregates[-1].year_month if aggregates else None
