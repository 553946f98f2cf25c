"""Pydantic schemas for pet listings."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from petadopt.models.pet import (
    AdoptionStatus,
    EnergyLevel,
    HealthStatus,
    PetGender,
    PetSize,
)
from petadopt.schemas.user import UserSummary


class PetBase(BaseModel):
    """Shared pet fields."""

    name: str = Field(min_length=1, max_length=100)
    breed: str = Field(min_length=1, max_length=120)
    age: int = Field(ge=0, le=30)
    gender: PetGender
    size: PetSize
    color: str | None = None
    description: str | None = None
    health_status: HealthStatus = HealthStatus.HEALTHY
    vaccination_status: bool = False
    spayed_neutered: bool = False
    adoption_fee: Decimal = Field(default=Decimal("0.00"), ge=0)
    images: list[str] = Field(default_factory=list)
    special_needs: str | None = None
    good_with_kids: bool = True
    good_with_pets: bool = True
    energy_level: EnergyLevel = EnergyLevel.MEDIUM


class PetCreate(PetBase):
    """Payload for listing a pet."""

    pass


class PetUpdate(BaseModel):
    """Mutable pet fields; ``adoption_status`` is honoured for admins only."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    breed: str | None = Field(default=None, min_length=1, max_length=120)
    age: int | None = Field(default=None, ge=0, le=30)
    gender: PetGender | None = None
    size: PetSize | None = None
    color: str | None = None
    description: str | None = None
    health_status: HealthStatus | None = None
    vaccination_status: bool | None = None
    spayed_neutered: bool | None = None
    adoption_fee: Decimal | None = Field(default=None, ge=0)
    images: list[str] | None = None
    special_needs: str | None = None
    good_with_kids: bool | None = None
    good_with_pets: bool | None = None
    energy_level: EnergyLevel | None = None
    adoption_status: AdoptionStatus | None = None


class PetSummary(BaseModel):
    """Compact pet representation embedded in workflow records."""

    id: int
    name: str
    breed: str
    age: int
    gender: PetGender
    size: PetSize
    adoption_status: AdoptionStatus
    uploaded_by: int
    images: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class PetRead(PetBase):
    """Serialized pet representation."""

    id: int
    adoption_status: AdoptionStatus
    uploaded_by: int
    created_at: datetime
    updated_at: datetime
    uploader: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)
