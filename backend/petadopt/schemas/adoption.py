"""Schemas for adoption applications."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from petadopt.models.adoption import AdoptionRequestStatus
from petadopt.schemas.pet import PetSummary
from petadopt.schemas.user import UserSummary


class AdoptionCreate(BaseModel):
    """Payload submitted by an adopter."""

    pet_id: int
    application_message: str = Field(min_length=1)
    contact_phone: str | None = None
    contact_address: str | None = None
    experience_with_pets: str | None = None
    living_situation: str | None = None
    other_pets: str | None = None


class AdoptionTransition(BaseModel):
    """Requested status change for an adoption application."""

    status: AdoptionRequestStatus
    admin_notes: str | None = None
    rejection_reason: str | None = None


class AdoptionRead(BaseModel):
    """Serialized adoption application."""

    id: int
    pet_id: int
    user_id: int
    status: AdoptionRequestStatus
    application_message: str
    contact_phone: str | None = None
    contact_address: str | None = None
    experience_with_pets: str | None = None
    living_situation: str | None = None
    other_pets: str | None = None
    admin_notes: str | None = None
    rejection_reason: str | None = None
    approved_by: int | None = None
    approved_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    pet: PetSummary | None = None
    adopter: UserSummary | None = None
    approver: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)
