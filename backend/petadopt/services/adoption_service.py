"""Adoption application workflow."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from petadopt.core.errors import ConflictError, ForbiddenError, NotFoundError
from petadopt.models import (
    Adoption,
    AdoptionRequestStatus,
    AdoptionStatus,
    Pet,
    UserRole,
)
from petadopt.schemas.adoption import AdoptionCreate
from petadopt.security.permissions import Action, Actor, can, require
from petadopt.services import audit_service
from petadopt.services.workflow import (
    ADOPTION_WORKFLOW,
    commit_transition,
    require_text,
    touch_pet,
)

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (AdoptionRequestStatus.PENDING, AdoptionRequestStatus.APPROVED)


def _adoption_query() -> Select[tuple[Adoption]]:
    return select(Adoption).options(
        selectinload(Adoption.pet),
        selectinload(Adoption.adopter),
        selectinload(Adoption.approver),
    )


async def get_adoption(
    session: AsyncSession, adoption_id: int, *, reload: bool = False
) -> Adoption | None:
    """Return an adoption with its pet and people loaded."""
    stmt = _adoption_query().where(Adoption.id == adoption_id)
    if reload:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def _require_adoption(
    session: AsyncSession, adoption_id: int, *, reload: bool = False
) -> Adoption:
    adoption = await get_adoption(session, adoption_id, reload=reload)
    if adoption is None:
        raise NotFoundError("Adoption request not found", adoption_id=adoption_id)
    return adoption


async def get_adoption_for_actor(
    session: AsyncSession, *, actor: Actor, adoption_id: int
) -> Adoption:
    adoption = await _require_adoption(session, adoption_id)
    require(actor, Action.ADOPTION_VIEW, adoption, message="Access denied")
    return adoption


async def list_adoptions(
    session: AsyncSession,
    *,
    actor: Actor,
    status: AdoptionRequestStatus | None = None,
    pet_id: int | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Adoption]:
    """Return adoptions visible to ``actor``, newest first."""
    stmt = _adoption_query()
    if actor.role == UserRole.USER:
        stmt = stmt.where(Adoption.user_id == actor.id)
    elif actor.role == UserRole.SHELTER:
        stmt = stmt.join(Adoption.pet).where(Pet.uploaded_by == actor.id)
    if status is not None:
        stmt = stmt.where(Adoption.status == status)
    if pet_id is not None:
        stmt = stmt.where(Adoption.pet_id == pet_id)
    stmt = stmt.order_by(Adoption.created_at.desc(), Adoption.id.desc())
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().all()


async def _has_other_active(
    session: AsyncSession, *, pet_id: int, exclude_id: int | None = None
) -> bool:
    stmt = select(Adoption.id).where(
        Adoption.pet_id == pet_id, Adoption.status.in_(ACTIVE_STATUSES)
    )
    if exclude_id is not None:
        stmt = stmt.where(Adoption.id != exclude_id)
    result = await session.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def create_adoption(
    session: AsyncSession,
    *,
    actor: Actor,
    payload: AdoptionCreate,
    ip_address: str | None = None,
) -> Adoption:
    """File an application and reserve the pet while it is reviewed."""
    require(actor, Action.ADOPTION_CREATE, message="Only adopters can apply")
    pet = await session.get(Pet, payload.pet_id)
    if pet is None:
        raise NotFoundError("Pet not found", pet_id=payload.pet_id)
    if pet.adoption_status != AdoptionStatus.AVAILABLE:
        raise ConflictError(
            "Pet is not available for adoption",
            pet_id=pet.id,
            adoption_status=pet.adoption_status.value,
        )
    if await _has_other_active(session, pet_id=pet.id):
        raise ConflictError(
            "Pet already has an active adoption request", pet_id=pet.id
        )

    adoption = Adoption(
        user_id=actor.id,
        status=AdoptionRequestStatus.PENDING,
        **payload.model_dump(),
    )
    pet.adoption_status = AdoptionStatus.PENDING
    session.add(adoption)
    await session.flush()
    await audit_service.record_event(
        session,
        event_type="adoption.created",
        user_id=actor.id,
        description=f"Adoption request for pet {pet.id}",
        payload={"adoption_id": adoption.id, "pet_id": pet.id},
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="adoption", entity_id=adoption.id)
    logger.info("Adoption %s filed for pet %s by user %s", adoption.id, pet.id, actor.id)
    return await _require_adoption(session, adoption.id, reload=True)


async def apply_transition(
    session: AsyncSession,
    *,
    actor: Actor,
    adoption_id: int,
    status: AdoptionRequestStatus,
    rejection_reason: str | None = None,
    admin_notes: str | None = None,
    ip_address: str | None = None,
) -> Adoption:
    """Move an adoption to ``status`` and apply the matching pet side effects."""
    adoption = await _require_adoption(session, adoption_id)
    if not can(actor, Action.ADOPTION_VIEW, adoption):
        raise ForbiddenError(
            "You can only manage adoptions for your own pets",
            adoption_id=adoption_id,
        )
    previous = adoption.status
    action = ADOPTION_WORKFLOW.check(previous, status)
    require(
        actor,
        action,
        adoption,
        message=f"Your role cannot move adoptions to {status.value}",
    )

    pet = adoption.pet
    now = datetime.now(UTC)
    if status == AdoptionRequestStatus.REJECTED:
        reason = require_text(
            rejection_reason,
            field="rejection_reason",
            message="A rejection reason is required to reject an application",
        )
        # Queries run before any mutation so autoflush cannot hit a stale row.
        others = await _has_other_active(session, pet_id=pet.id, exclude_id=adoption.id)
        adoption.rejection_reason = reason
        if not others and pet.adoption_status != AdoptionStatus.ADOPTED:
            pet.adoption_status = AdoptionStatus.AVAILABLE
    elif status == AdoptionRequestStatus.APPROVED:
        if pet.adoption_status == AdoptionStatus.ADOPTED:
            raise ConflictError("Pet has already been adopted", pet_id=pet.id)
        if await _has_other_active(session, pet_id=pet.id, exclude_id=adoption.id):
            raise ConflictError(
                "Another application for this pet is still active",
                pet_id=pet.id,
            )
        adoption.approved_by = actor.id
        adoption.approved_at = now
        pet.adoption_status = AdoptionStatus.PENDING
    elif status == AdoptionRequestStatus.COMPLETED:
        adoption.completed_at = now
        pet.adoption_status = AdoptionStatus.ADOPTED

    if admin_notes is not None:
        adoption.admin_notes = admin_notes.strip() or None
    adoption.status = status
    touch_pet(pet)

    await audit_service.record_event(
        session,
        event_type=f"adoption.{status.value}",
        user_id=actor.id,
        description=f"Adoption {adoption.id}: {previous.value} -> {status.value}",
        payload={
            "adoption_id": adoption.id,
            "pet_id": pet.id,
            "from": previous.value,
            "to": status.value,
        },
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="adoption", entity_id=adoption.id)
    logger.info(
        "Adoption %s moved %s -> %s by %s",
        adoption.id,
        previous.value,
        status.value,
        actor.id,
    )
    return await _require_adoption(session, adoption.id, reload=True)


async def delete_adoption(
    session: AsyncSession,
    *,
    actor: Actor,
    adoption_id: int,
    ip_address: str | None = None,
) -> None:
    """Remove an application, releasing the pet when it was still active."""
    adoption = await _require_adoption(session, adoption_id)
    require(actor, Action.ADOPTION_DELETE, adoption)
    pet = adoption.pet
    if adoption.status in ACTIVE_STATUSES and pet is not None:
        if not await _has_other_active(session, pet_id=pet.id, exclude_id=adoption.id):
            pet.adoption_status = AdoptionStatus.AVAILABLE
        touch_pet(pet)
    await session.delete(adoption)
    await audit_service.record_event(
        session,
        event_type="adoption.deleted",
        user_id=actor.id,
        description=f"Deleted adoption {adoption_id}",
        payload={"adoption_id": adoption_id, "status": adoption.status.value},
        ip_address=ip_address,
        commit=False,
    )
    await commit_transition(session, entity="adoption", entity_id=adoption_id)
    logger.info("Adoption %s deleted by %s", adoption_id, actor.id)
