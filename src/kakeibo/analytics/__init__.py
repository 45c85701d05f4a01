"""Spending aggregation for charts."""

from kakeibo.analytics.aggregator import (
    UNCATEGORIZED,
    AggregationRow,
    CategoryAggregate,
    MonthlyAggregate,
    aggregate_by_category,
    aggregate_monthly,
    latest_year_month,
    year_month_key,
)

__all__ = [
    "UNCATEGORIZED",
    "AggregationRow",
    "CategoryAggregate",
    "MonthlyAggregate",
    "aggregate_by_category",
    "aggregate_monthly",
    "latest_year_month",
    "year_month_key",
]
