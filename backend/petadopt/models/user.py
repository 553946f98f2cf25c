"""User model for adopters, shelters and administrators."""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, TimestampMixin


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from petadopt.models.adoption import Adoption
    from petadopt.models.favorite import Favorite
    from petadopt.models.pet import Pet


class UserRole(str, enum.Enum):
    """Role enumeration for platform permissions."""

    USER = "user"
    SHELTER = "shelter"
    ADMIN = "admin"


class User(TimestampMixin, Base):
    """User entity for authentication and authorization."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), default=UserRole.USER, nullable=False, index=True
    )
    phone: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    profile_image: Mapped[str | None] = mapped_column(String(1024))

    pets: Mapped[list["Pet"]] = relationship(
        "Pet",
        back_populates="uploader",
        foreign_keys="Pet.uploaded_by",
        passive_deletes=True,
    )
    adoptions: Mapped[list["Adoption"]] = relationship(
        "Adoption",
        back_populates="adopter",
        foreign_keys="Adoption.user_id",
        passive_deletes=True,
    )
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
