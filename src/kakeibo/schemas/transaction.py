"""Transaction-specific request/response schemas."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kakeibo.models.transaction import OwnershipTag
from kakeibo.schemas.statement import MoneyMeta


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    statement_id: UUID
    posting_date: date
    amount: Decimal
    description: str | None = None
    ownership_tag: OwnershipTag


class TransactionListResult(BaseModel):
    """Transactions of a statement plus the header figures."""

    transactions: list[TransactionResponse]
    count: int
    total_amount: Decimal
    money: MoneyMeta


class OwnershipTagUpdate(BaseModel):
    tag: OwnershipTag = Field(description="New ownership tag")
