"""Free-text comment attached to a household scope (e.g. a month)."""
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kakeibo.models.base import BaseModel


class Comment(BaseModel):
    """Comment left on a month of household spending."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_household_scope", "household_id", "scope_type", "scope_key"),
    )

    household_id: Mapped[UUID] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"), nullable=False
    )
    scope_type: Mapped[str] = mapped_column(String(20), nullable=False, default="month")
    scope_key: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, scope={self.scope_type}:{self.scope_key})>"
