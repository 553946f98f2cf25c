"""Authentication schemas."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from petadopt.models.user import UserRole
from petadopt.schemas.user import UserRead


class Token(BaseModel):
    """Response body for access tokens."""

    access_token: str
    token_type: str = "bearer"


class RegistrationRequest(BaseModel):
    """Self-service registration payload for adopters and shelters."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = UserRole.USER
    phone: str | None = None
    address: str | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("role")
    @classmethod
    def _no_self_service_admins(cls, value: UserRole) -> UserRole:
        if value == UserRole.ADMIN:
            raise ValueError("Administrators cannot self-register")
        return value


class RegistrationResponse(BaseModel):
    """Response after successful self-service registration."""

    token: Token
    user: UserRead


class ProfileUpdate(BaseModel):
    """Fields a signed-in user may change on their own profile."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    phone: str | None = None
    address: str | None = None
    profile_image: str | None = None
    password: str | None = Field(default=None, min_length=6)
