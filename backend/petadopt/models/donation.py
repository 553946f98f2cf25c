"""Donation (pet surrender) request model."""
from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, TimestampMixin, utcnow


if TYPE_CHECKING:  # pragma: no cover
    from petadopt.models.pet import Pet
    from petadopt.models.user import User


class DonationStatus(str, enum.Enum):
    """Lifecycle states for donation requests."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class Donation(TimestampMixin, Base):
    """A pet owner's request to hand a pet over to a shelter."""

    __tablename__ = "donations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pet_id: Mapped[int] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    shelter_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    donor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    donor_name: Mapped[str | None] = mapped_column(String(120))
    donor_email: Mapped[str | None] = mapped_column(String(320))
    donor_phone: Mapped[str | None] = mapped_column(String(32))
    donation_reason: Mapped[str | None] = mapped_column(Text)
    pet_background: Mapped[str | None] = mapped_column(Text)
    status: Mapped[DonationStatus] = mapped_column(
        Enum(DonationStatus),
        default=DonationStatus.PENDING,
        nullable=False,
        index=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    pickup_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)
    admin_notes: Mapped[str | None] = mapped_column(Text)
    processed_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    pet: Mapped["Pet"] = relationship("Pet", back_populates="donations")
    shelter: Mapped["User"] = relationship("User", foreign_keys=[shelter_id])
    donor: Mapped["User | None"] = relationship("User", foreign_keys=[donor_id])
    processor: Mapped["User | None"] = relationship(
        "User", foreign_keys=[processed_by]
    )
