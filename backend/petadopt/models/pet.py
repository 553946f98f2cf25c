"""Pet listing model."""

from __future__ import annotations

import enum
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, TimestampMixin


if TYPE_CHECKING:
    from petadopt.models import Adoption, Document, Donation, Favorite, User


class PetGender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class PetSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class HealthStatus(str, enum.Enum):
    HEALTHY = "healthy"
    NEEDS_CARE = "needs_care"
    RECOVERING = "recovering"


class AdoptionStatus(str, enum.Enum):
    """Listing state of a pet; driven by the adoption and donation workflows."""

    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"


class EnergyLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Pet(TimestampMixin, Base):
    """Represents a pet listed for adoption."""

    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    breed: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[PetGender] = mapped_column(Enum(PetGender), nullable=False)
    size: Mapped[PetSize] = mapped_column(Enum(PetSize), nullable=False)
    color: Mapped[str | None] = mapped_column(String(120))
    description: Mapped[str | None] = mapped_column(Text)
    health_status: Mapped[HealthStatus] = mapped_column(
        Enum(HealthStatus), default=HealthStatus.HEALTHY, nullable=False
    )
    vaccination_status: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    spayed_neutered: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    adoption_status: Mapped[AdoptionStatus] = mapped_column(
        Enum(AdoptionStatus),
        default=AdoptionStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    uploaded_by: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    adoption_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00"), nullable=False
    )
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    special_needs: Mapped[str | None] = mapped_column(Text)
    good_with_kids: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    good_with_pets: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    energy_level: Mapped[EnergyLevel] = mapped_column(
        Enum(EnergyLevel), default=EnergyLevel.MEDIUM, nullable=False
    )

    # bumped on every listing change; concurrent workflow writers collide here
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    uploader: Mapped["User"] = relationship(
        "User", back_populates="pets", foreign_keys=[uploaded_by]
    )
    adoptions: Mapped[list["Adoption"]] = relationship(
        "Adoption", back_populates="pet", cascade="all, delete-orphan"
    )
    donations: Mapped[list["Donation"]] = relationship(
        "Donation", back_populates="pet", cascade="all, delete-orphan"
    )
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="pet", cascade="all, delete-orphan"
    )
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite", back_populates="pet", cascade="all, delete-orphan"
    )
