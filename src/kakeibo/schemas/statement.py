"""Pydantic schemas for statement upload and listing."""

import datetime as dt
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., JPY)")
    minor_unit: int = Field(description="Number of decimal places for the currency")


class ParsedRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    merchant: str
    amount: Decimal
    category_raw: str


class StatementPreviewResult(BaseModel):
    """Parsed content of a statement file, before anything is stored."""

    rows: list[ParsedRowResponse]
    rows_count: int
    total_amount: Decimal
    detected_year: int | None = None
    detected_month: int | None = None


class StatementUploadResult(BaseModel):
    """Result of a successful upload."""

    statement_id: UUID
    year: int
    month: int
    source: str
    transactions_count: int
    replaced_statement_id: UUID | None = Field(
        None, description="ID of the previous statement for the same month and source"
    )
    processing_time_ms: int


class StatementResponse(BaseModel):
    """Statement summary for list views."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    year: int
    month: int
    source: str
    original_filename: str | None = None
    transactions_count: int = 0
    created_at: datetime


class StatementListResult(BaseModel):
    statements: list[StatementResponse]
