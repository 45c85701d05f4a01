"""Transaction model representing one row of an uploaded statement."""
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kakeibo.models.base import BaseModel


class OwnershipTag(str, Enum):
    """Which household member a transaction belongs to."""

    PAPA = "papa"
    MAMA = "mama"
    SHARED = "shared"


class Transaction(BaseModel):
    """Single card transaction, tagged by household member."""

    __tablename__ = "transactions"

    statement_id: Mapped[UUID] = mapped_column(
        ForeignKey("statements.id", ondelete="CASCADE"), nullable=False, index=True
    )
    household_id: Mapped[UUID] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    posting_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    raw_merchant: Mapped[str | None] = mapped_column(Text, nullable=True)
    ownership_tag: Mapped[str] = mapped_column(
        String(10), nullable=False, default=OwnershipTag.SHARED.value
    )

    statement: Mapped["Statement"] = relationship("Statement", back_populates="transactions")
    category: Mapped["Category | None"] = relationship("Category", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, amount={self.amount}, tag={self.ownership_tag})>"
