"""Read-model aggregation for dashboards.

Each function issues a handful of ``GROUP BY`` queries and zero-fills the
result from the status enum, so an empty database yields all-zero counters.
Nothing here writes; callers are expected to poll.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from petadopt.core.config import get_settings
from petadopt.models import (
    Adoption,
    AdoptionRequestStatus,
    AdoptionStatus,
    Document,
    Donation,
    DonationStatus,
    Favorite,
    Pet,
    User,
    UserRole,
)
from petadopt.schemas.stats import (
    AdoptionStats,
    BreedCount,
    DashboardSummary,
    DonationStats,
    NotificationCounts,
    PetStats,
    UserStats,
)
from petadopt.security.permissions import Actor


def _start_of_month(now: datetime | None = None) -> datetime:
    now = now or datetime.now(UTC)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


async def _count_by_status(
    session: AsyncSession,
    status_column: Any,
    statuses: type[enum.Enum],
    *criteria: ColumnElement[bool],
    join: Any | None = None,
) -> dict[str, int]:
    stmt = select(status_column, func.count()).select_from(status_column.class_)
    if join is not None:
        stmt = stmt.join(join)
    stmt = stmt.where(*criteria).group_by(status_column)
    counts = {member.value: 0 for member in statuses}
    for status, count in (await session.execute(stmt)).all():
        counts[status.value] = count
    return counts


async def _count(
    session: AsyncSession,
    model: Any,
    *criteria: ColumnElement[bool],
    join: Any | None = None,
) -> int:
    stmt = select(func.count()).select_from(model)
    if join is not None:
        stmt = stmt.join(join)
    return int(await session.scalar(stmt.where(*criteria)) or 0)


def _adoption_scope(actor: Actor | None) -> tuple[list[ColumnElement[bool]], Any]:
    if actor is None or actor.is_admin:
        return [], None
    if actor.is_shelter:
        return [Pet.uploaded_by == actor.id], Adoption.pet
    return [Adoption.user_id == actor.id], None


def _donation_scope(actor: Actor | None) -> list[ColumnElement[bool]]:
    if actor is None or actor.is_admin:
        return []
    if actor.is_shelter:
        return [Donation.shelter_id == actor.id]
    return [Donation.donor_id == actor.id]


async def adoption_stats(
    session: AsyncSession, *, actor: Actor | None = None
) -> AdoptionStats:
    criteria, join = _adoption_scope(actor)
    counts = await _count_by_status(
        session, Adoption.status, AdoptionRequestStatus, *criteria, join=join
    )
    this_month = await _count(
        session,
        Adoption,
        Adoption.created_at >= _start_of_month(),
        *criteria,
        join=join,
    )
    return AdoptionStats(**counts, total=sum(counts.values()), this_month=this_month)


async def donation_stats(
    session: AsyncSession, *, actor: Actor | None = None
) -> DonationStats:
    criteria = _donation_scope(actor)
    counts = await _count_by_status(session, Donation.status, DonationStatus, *criteria)
    this_month = await _count(
        session, Donation, Donation.created_at >= _start_of_month(), *criteria
    )
    return DonationStats(**counts, total=sum(counts.values()), this_month=this_month)


async def pet_stats(session: AsyncSession, *, uploaded_by: int | None = None) -> PetStats:
    settings = get_settings()
    criteria = [Pet.uploaded_by == uploaded_by] if uploaded_by is not None else []
    counts = await _count_by_status(
        session, Pet.adoption_status, AdoptionStatus, *criteria
    )
    recent = await _count(
        session,
        Pet,
        Pet.created_at
        >= datetime.now(UTC) - timedelta(days=settings.stats_recent_pet_days),
        *criteria,
    )
    breed_rows = await session.execute(
        select(Pet.breed, func.count(Pet.id).label("count"))
        .where(*criteria)
        .group_by(Pet.breed)
        .order_by(func.count(Pet.id).desc(), Pet.breed.asc())
        .limit(settings.stats_top_breeds)
    )
    return PetStats(
        **counts,
        total=sum(counts.values()),
        this_month=recent,
        top_breeds=[BreedCount(breed=breed, count=count) for breed, count in breed_rows],
    )


async def user_stats(session: AsyncSession) -> UserStats:
    rows = await session.execute(
        select(User.role, User.is_active, func.count(User.id)).group_by(
            User.role, User.is_active
        )
    )
    stats = UserStats()
    for role, is_active, count in rows.all():
        stats.total_users += count
        if not is_active:
            stats.inactive_users += count
        elif role == UserRole.USER:
            stats.active_users += count
        elif role == UserRole.SHELTER:
            stats.active_shelters += count
        elif role == UserRole.ADMIN:
            stats.active_admins += count
    return stats


async def favorite_count(session: AsyncSession, *, user_id: int) -> int:
    return await _count(session, Favorite, Favorite.user_id == user_id)


async def dashboard_summary(session: AsyncSession, *, actor: Actor) -> DashboardSummary:
    """Counters for the caller's dashboard, scoped to what their role sees."""
    summary = DashboardSummary(
        role=actor.role.value,
        adoptions=await adoption_stats(session, actor=actor),
        donations=await donation_stats(session, actor=actor),
        favorites=await favorite_count(session, user_id=actor.id),
    )
    if actor.is_admin:
        summary.pets = await pet_stats(session)
        summary.users = await user_stats(session)
    elif actor.is_shelter:
        summary.pets = await pet_stats(session, uploaded_by=actor.id)
    return summary


async def notification_counts(
    session: AsyncSession, *, actor: Actor
) -> NotificationCounts:
    """Pending work for the caller, cheap enough to poll every few seconds."""
    criteria, join = _adoption_scope(actor)
    pending_adoptions = await _count(
        session,
        Adoption,
        Adoption.status == AdoptionRequestStatus.PENDING,
        *criteria,
        join=join,
    )
    pending_donations = await _count(
        session,
        Donation,
        Donation.status == DonationStatus.PENDING,
        *_donation_scope(actor),
    )
    unverified = 0
    if actor.is_admin:
        unverified = await _count(session, Document, Document.is_verified.is_(False))
    return NotificationCounts(
        pending_adoptions=pending_adoptions,
        pending_donations=pending_donations,
        unverified_documents=unverified,
    )
