"""Response schemas for spending charts."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from kakeibo.schemas.statement import MoneyMeta


class MonthlyAggregateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year_month: str
    total: Decimal
    papa: Decimal
    mama: Decimal
    shared: Decimal


class MonthlySeriesResult(BaseModel):
    months: list[MonthlyAggregateResponse]
    latest_year_month: str | None
    money: MoneyMeta


class CategoryAggregateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    total: Decimal
    papa: Decimal
    mama: Decimal
    shared: Decimal


class CategoryBreakdownResult(BaseModel):
    year_month: str | None
    categories: list[CategoryAggregateResponse]
    money: MoneyMeta
