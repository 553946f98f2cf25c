"""Donation (pet hand-over) workflow."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from petadopt.core.errors import (
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from petadopt.models import (
    Adoption,
    AdoptionStatus,
    Document,
    Donation,
    DonationStatus,
    Favorite,
    Pet,
    User,
    UserRole,
)
from petadopt.schemas.donation import DonationCreate
from petadopt.security.permissions import Action, Actor, can, require
from petadopt.services import audit_service
from petadopt.services.workflow import (
    DONATION_WORKFLOW,
    commit_transition,
    require_text,
    touch_pet,
)

logger = logging.getLogger(__name__)

# The pet is still listed under the donor in these states.
UNTRANSFERRED_STATUSES = (DonationStatus.PENDING, DonationStatus.REJECTED)


def _donation_query() -> Select[tuple[Donation]]:
    return select(Donation).options(
        selectinload(Donation.pet),
        selectinload(Donation.shelter),
        selectinload(Donation.processor),
    )


async def get_donation(
    session: AsyncSession, donation_id: int, *, reload: bool = False
) -> Donation | None:
    stmt = _donation_query().where(Donation.id == donation_id)
    if reload:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def _require_donation(
    session: AsyncSession, donation_id: int, *, reload: bool = False
) -> Donation:
    donation = await get_donation(session, donation_id, reload=reload)
    if donation is None:
        raise NotFoundError("Donation not found", donation_id=donation_id)
    return donation


async def get_donation_for_actor(
    session: AsyncSession, *, actor: Actor, donation_id: int
) -> Donation:
    donation = await _require_donation(session, donation_id)
    require(actor, Action.DONATION_VIEW, donation, message="Access denied")
    return donation


async def list_donations(
    session: AsyncSession,
    *,
    actor: Actor,
    status: DonationStatus | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Donation]:
    """Return donations visible to ``actor``, newest first."""
    stmt = _donation_query()
    if actor.role == UserRole.SHELTER:
        stmt = stmt.where(Donation.shelter_id == actor.id)
    elif actor.role == UserRole.USER:
        stmt = stmt.where(Donation.donor_id == actor.id)
    if status is not None:
        stmt = stmt.where(Donation.status == status)
    stmt = stmt.order_by(Donation.created_at.desc(), Donation.id.desc())
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def create_donation(
    session: AsyncSession,
    *,
    actor: Actor,
    payload: DonationCreate,
    ip_address: str | None = None,
) -> Donation:
    """List the donated pet as unavailable and file a pending donation."""
    require(actor, Action.DONATION_CREATE)
    shelter = await session.get(User, payload.shelter_id)
    if shelter is None or shelter.role != UserRole.SHELTER or not shelter.is_active:
        raise NotFoundError(
            "Shelter not found or inactive", shelter_id=payload.shelter_id
        )
    donor = await session.get(User, actor.id)

    pet = Pet(
        **payload.pet.model_dump(),
        adoption_status=AdoptionStatus.PENDING,
        uploaded_by=actor.id,
    )
    donation = Donation(
        pet=pet,
        shelter_id=shelter.id,
        donor_id=actor.id,
        donor_name=payload.donor_name or (donor.name if donor else None),
        donor_email=payload.donor_email or (donor.email if donor else None),
        donor_phone=payload.donor_phone or (donor.phone if donor else None),
        donation_reason=payload.donation_reason,
        pet_background=payload.pet_background,
        pickup_date=payload.pickup_date,
        notes=payload.notes,
        status=DonationStatus.PENDING,
    )
    session.add(donation)
    await session.flush()
    await audit_service.record_event(
        session,
        event_type="donation.created",
        user_id=actor.id,
        description=f"Donation of pet {pet.id} to shelter {shelter.id}",
        payload={"donation_id": donation.id, "pet_id": pet.id},
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="donation", entity_id=donation.id)
    logger.info(
        "Donation %s filed by user %s for shelter %s",
        donation.id,
        actor.id,
        shelter.id,
    )
    return await _require_donation(session, donation.id, reload=True)


async def apply_transition(
    session: AsyncSession,
    *,
    actor: Actor,
    donation_id: int,
    status: DonationStatus,
    admin_notes: str | None = None,
    pickup_date: datetime | None = None,
    notes: str | None = None,
    ip_address: str | None = None,
) -> Donation:
    """Move a donation to ``status``; acceptance lists the pet at the shelter."""
    donation = await _require_donation(session, donation_id)
    if not can(actor, Action.DONATION_VIEW, donation):
        raise ForbiddenError(
            "You can only update donations to your shelter",
            donation_id=donation_id,
        )
    previous = donation.status
    action = DONATION_WORKFLOW.check(previous, status)
    require(
        actor,
        action,
        donation,
        message=f"Your role cannot move donations to {status.value}",
    )

    pet = donation.pet
    now = datetime.now(UTC)
    if status == DonationStatus.REJECTED:
        donation.admin_notes = require_text(
            admin_notes,
            field="admin_notes",
            message="Admin notes are required to reject a donation",
        )
    elif status == DonationStatus.ACCEPTED:
        if pickup_date is None:
            raise ValidationFailedError(
                "A pickup date is required to accept a donation",
                field="pickup_date",
            )
        donation.pickup_date = pickup_date
        donation.processed_by = actor.id
        donation.processed_at = now
        pet.adoption_status = AdoptionStatus.AVAILABLE
        pet.uploaded_by = donation.shelter_id
    elif status == DonationStatus.COMPLETED:
        if donation.pickup_date is None:
            raise ValidationFailedError(
                "The donation has no pickup date to complete against",
                field="pickup_date",
            )

    if admin_notes is not None and status != DonationStatus.REJECTED:
        donation.admin_notes = admin_notes.strip() or None
    if notes is not None:
        donation.notes = notes
    donation.status = status
    touch_pet(pet)

    await audit_service.record_event(
        session,
        event_type=f"donation.{status.value}",
        user_id=actor.id,
        description=f"Donation {donation.id}: {previous.value} -> {status.value}",
        payload={
            "donation_id": donation.id,
            "pet_id": pet.id,
            "from": previous.value,
            "to": status.value,
        },
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="donation", entity_id=donation.id)
    logger.info(
        "Donation %s moved %s -> %s by %s",
        donation.id,
        previous.value,
        status.value,
        actor.id,
    )
    return await _require_donation(session, donation.id, reload=True)


async def delete_donation(
    session: AsyncSession,
    *,
    actor: Actor,
    donation_id: int,
    ip_address: str | None = None,
) -> None:
    """Remove a donation; a pet the shelter never took in is removed with it."""
    donation = await _require_donation(session, donation_id)
    require(actor, Action.DONATION_DELETE, donation)
    status = donation.status
    remove_pet = status in UNTRANSFERRED_STATUSES
    if remove_pet:
        pet_id = donation.pet_id
        for model, column in (
            (Favorite, Favorite.pet_id),
            (Document, Document.pet_id),
            (Adoption, Adoption.pet_id),
            (Donation, Donation.pet_id),
            (Pet, Pet.id),
        ):
            await session.execute(delete(model).where(column == pet_id))
    else:
        await session.delete(donation)
    await audit_service.record_event(
        session,
        event_type="donation.deleted",
        user_id=actor.id,
        description=f"Deleted donation {donation_id}",
        payload={
            "donation_id": donation_id,
            "status": status.value,
            "pet_removed": remove_pet,
        },
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="donation", entity_id=donation_id)
    logger.info("Donation %s deleted by %s", donation_id, actor.id)
