"""Aggregated spending for charts."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.analytics import latest_year_month
from kakeibo.api.deps import get_db, get_household_id
from kakeibo.api.v1.statements import money_meta
from kakeibo.schemas.analytics import (
    CategoryAggregateResponse,
    CategoryBreakdownResult,
    MonthlyAggregateResponse,
    MonthlySeriesResult,
)
from kakeibo.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/monthly",
    response_model=MonthlySeriesResult,
    summary="Monthly totals by owner",
    description="Per-month total with papa, mama and shared subtotals, oldest month first.",
)
async def monthly_totals(
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> MonthlySeriesResult:
    months = await AnalyticsService(db).monthly(household_id)
    return MonthlySeriesResult(
        months=[MonthlyAggregateResponse.model_validate(m) for m in months],
        latest_year_month=latest_year_month(months),
        money=money_meta(),
    )


@router.get(
    "/categories",
    response_model=CategoryBreakdownResult,
    summary="Category breakdown of a month",
)
async def category_breakdown(
    ym: Annotated[
        str | None, Query(description="Month as YYYY-MM; defaults to the latest month")
    ] = None,
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> CategoryBreakdownResult:
    year_month, categories = await AnalyticsService(db).by_category(household_id, ym)
    return CategoryBreakdownResult(
        year_month=year_month,
        categories=[CategoryAggregateResponse.model_validate(c) for c in categories],
        money=money_meta(),
    )
