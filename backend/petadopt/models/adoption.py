"""Adoption application model."""
from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, TimestampMixin


if TYPE_CHECKING:  # pragma: no cover
    from petadopt.models.pet import Pet
    from petadopt.models.user import User


class AdoptionRequestStatus(str, enum.Enum):
    """Lifecycle states for adoption applications."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class Adoption(TimestampMixin, Base):
    """A user's application to adopt a specific pet."""

    __tablename__ = "adoptions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pet_id: Mapped[int] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[AdoptionRequestStatus] = mapped_column(
        Enum(AdoptionRequestStatus),
        default=AdoptionRequestStatus.PENDING,
        nullable=False,
        index=True,
    )
    application_message: Mapped[str] = mapped_column(Text, nullable=False)
    contact_phone: Mapped[str | None] = mapped_column(String(32))
    contact_address: Mapped[str | None] = mapped_column(Text)
    experience_with_pets: Mapped[str | None] = mapped_column(Text)
    living_situation: Mapped[str | None] = mapped_column(Text)
    other_pets: Mapped[str | None] = mapped_column(Text)
    admin_notes: Mapped[str | None] = mapped_column(Text)
    rejection_reason: Mapped[str | None] = mapped_column(Text)
    approved_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    pet: Mapped["Pet"] = relationship("Pet", back_populates="adoptions")
    adopter: Mapped["User"] = relationship(
        "User", back_populates="adoptions", foreign_keys=[user_id]
    )
    approver: Mapped["User | None"] = relationship("User", foreign_keys=[approved_by])
