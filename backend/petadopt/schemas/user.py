"""User-related schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from petadopt.models.user import UserRole


class UserSummary(BaseModel):
    """Lightweight user representation embedded in other resources."""

    id: int
    name: str
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class UserBase(BaseModel):
    """Shared user fields."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.USER
    phone: str | None = None
    address: str | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()


class UserCreate(UserBase):
    """Payload for creating a user (administrators only)."""

    password: str = Field(min_length=6)
    is_active: bool = True


class UserRead(BaseModel):
    """Serialized user response."""

    id: int
    name: str
    email: str
    role: UserRole
    phone: str | None = None
    address: str | None = None
    is_active: bool
    profile_image: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Mutable user fields."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    role: UserRole | None = None
    phone: str | None = None
    address: str | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str | None) -> str | None:
        return value.lower() if value else value


class UserStatusUpdate(BaseModel):
    """Activate or deactivate an account."""

    is_active: bool


class ShelterRead(BaseModel):
    """Public shelter directory entry."""

    id: int
    name: str
    email: str
    phone: str | None = None
    address: str | None = None

    model_config = ConfigDict(from_attributes=True)
