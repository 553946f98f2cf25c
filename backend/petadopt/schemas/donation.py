"""Schemas for donation requests."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from petadopt.models.donation import DonationStatus
from petadopt.schemas.pet import PetCreate, PetSummary
from petadopt.schemas.user import UserSummary


class DonationCreate(BaseModel):
    """A donor's hand-over request; the pet is listed from ``pet``."""

    shelter_id: int
    pet: PetCreate
    donor_name: str | None = None
    donor_email: EmailStr | None = None
    donor_phone: str | None = None
    donation_reason: str | None = None
    pet_background: str | None = None
    pickup_date: datetime | None = None
    notes: str | None = None


class DonationTransition(BaseModel):
    """Requested status change for a donation."""

    status: DonationStatus
    admin_notes: str | None = None
    pickup_date: datetime | None = None
    notes: str | None = None


class DonationRead(BaseModel):
    """Serialized donation request."""

    id: int
    pet_id: int
    shelter_id: int
    donor_id: int | None = None
    donor_name: str | None = None
    donor_email: str | None = None
    donor_phone: str | None = None
    donation_reason: str | None = None
    pet_background: str | None = None
    status: DonationStatus
    date: datetime
    pickup_date: datetime | None = None
    notes: str | None = None
    admin_notes: str | None = None
    processed_by: int | None = None
    processed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    pet: PetSummary | None = None
    shelter: UserSummary | None = None
    processor: UserSummary | None = None

    model_config = ConfigDict(from_attributes=True)
