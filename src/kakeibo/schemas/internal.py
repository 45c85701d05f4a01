"""Internal data schemas for parsed statement data.

These models sit between the CSV parser and persistence; they are never
stored as-is.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class ParsedRow(BaseModel):
    """One data row extracted from a statement CSV."""

    date: dt.date = Field(..., description="Usage date")
    merchant: str = Field(..., description="Merchant / usage description")
    amount: Decimal = Field(..., description="Amount in currency units")
    category_raw: str = Field(default="", description="Card provider's category label")

    @field_validator("merchant")
    @classmethod
    def merchant_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Merchant cannot be empty")
        return v.strip()

    @field_validator("amount")
    @classmethod
    def amount_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v
