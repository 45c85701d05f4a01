"""Profile model: display name and household role of a user."""
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kakeibo.models.base import BaseModel


class Profile(BaseModel):
    """Per-user profile created at sign-up."""

    __tablename__ = "profiles"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # "papa" or "mama"
    role: Mapped[str] = mapped_column(String(10), nullable=False)
    default_tag: Mapped[str] = mapped_column(String(10), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="profile")

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, role={self.role})>"
