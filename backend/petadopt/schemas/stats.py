"""Read-model schemas returned by the dashboard aggregators."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AdoptionStats(BaseModel):
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    completed: int = 0
    total: int = 0
    this_month: int = 0


class DonationStats(BaseModel):
    pending: int = 0
    accepted: int = 0
    rejected: int = 0
    completed: int = 0
    total: int = 0
    this_month: int = 0


class BreedCount(BaseModel):
    breed: str
    count: int


class PetStats(BaseModel):
    total: int = 0
    available: int = 0
    pending: int = 0
    adopted: int = 0
    this_month: int = 0
    top_breeds: list[BreedCount] = Field(default_factory=list)


class UserStats(BaseModel):
    total_users: int = 0
    active_users: int = 0
    active_shelters: int = 0
    active_admins: int = 0
    inactive_users: int = 0


class NotificationCounts(BaseModel):
    """Pending work for the caller; designed to be polled."""

    pending_adoptions: int = 0
    pending_donations: int = 0
    unverified_documents: int = 0


class DashboardSummary(BaseModel):
    """Role-scoped dashboard counters."""

    role: str
    adoptions: AdoptionStats
    donations: DonationStats
    pets: PetStats | None = None
    users: UserStats | None = None
    favorites: int = 0
