"""Favorite relation between users and pets."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, utcnow

if TYPE_CHECKING:  # pragma: no cover
    from petadopt.models.pet import Pet
    from petadopt.models.user import User


class Favorite(Base):
    """A saved bookmark; at most one row per (user, pet)."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "pet_id", name="uq_favorites_user_pet"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pet_id: Mapped[int] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    user: Mapped["User"] = relationship("User", back_populates="favorites")
    pet: Mapped["Pet"] = relationship("Pet", back_populates="favorites")
