"""Household and membership models."""
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kakeibo.models.base import BaseModel


class Household(BaseModel):
    """A group of members sharing one set of financial records."""

    __tablename__ = "households"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    members: Mapped[list["HouseholdMember"]] = relationship(
        "HouseholdMember", back_populates="household", lazy="selectin", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Household(id={self.id}, name={self.name})>"


class HouseholdMember(BaseModel):
    """Membership of a user in a household."""

    __tablename__ = "users_households"
    __table_args__ = (UniqueConstraint("user_id", "household_id", name="uq_user_household"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    household_id: Mapped[UUID] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")

    household: Mapped["Household"] = relationship("Household", back_populates="members")

    def __repr__(self) -> str:
        return f"<HouseholdMember(user_id={self.user_id}, household_id={self.household_id})>"
