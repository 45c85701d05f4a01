"""Statement model: one uploaded CSV for a (year, month, source) triple."""
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kakeibo.models.base import BaseModel


class Statement(BaseModel):
    """Monthly card statement belonging to a household."""

    __tablename__ = "statements"
    __table_args__ = (
        UniqueConstraint("household_id", "year", "month", "source", name="uq_household_statement"),
    )

    household_id: Mapped[UUID] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[str] = mapped_column(String(50), nullable=False)
    original_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    uploaded_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Read through TransactionRepository and removed by
    # StatementRepository.delete_with_transactions; never loaded from here.
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction",
        back_populates="statement",
        lazy="raise",
        passive_deletes="all",
    )

    @property
    def year_month(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __repr__(self) -> str:
        return f"<Statement(id={self.id}, {self.year_month}, source={self.source})>"
