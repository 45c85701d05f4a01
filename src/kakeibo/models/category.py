"""Household-scoped spending category."""
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from kakeibo.models.base import BaseModel


class Category(BaseModel):
    """Category label, usually the card provider's own classification."""

    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("household_id", "name", name="uq_household_category"),)

    household_id: Mapped[UUID] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
