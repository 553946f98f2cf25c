"""Pet listing service helpers."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from petadopt.core.config import get_settings
from petadopt.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from petadopt.models import (
    Adoption,
    AdoptionStatus,
    Document,
    Donation,
    EnergyLevel,
    Favorite,
    HealthStatus,
    Pet,
    PetGender,
    PetSize,
)
from petadopt.schemas.pet import PetCreate, PetUpdate
from petadopt.security.permissions import Action, Actor, can, require
from petadopt.services import audit_service
from petadopt.services.adoption_service import ACTIVE_STATUSES
from petadopt.services.workflow import commit_transition

logger = logging.getLogger(__name__)


def _base_pet_query() -> Select[tuple[Pet]]:
    return select(Pet).options(selectinload(Pet.uploader))


def _check_images(images: list[str] | None) -> None:
    limit = get_settings().pet_image_limit
    if images is not None and len(images) > limit:
        raise ValidationFailedError(
            f"A pet can have at most {limit} images", field="images"
        )


async def list_pets(
    session: AsyncSession,
    *,
    skip: int = 0,
    limit: int = 50,
    adoption_status: AdoptionStatus | None = AdoptionStatus.AVAILABLE,
    breed: str | None = None,
    age_min: int | None = None,
    age_max: int | None = None,
    gender: PetGender | None = None,
    size: PetSize | None = None,
    health_status: HealthStatus | None = None,
    good_with_kids: bool | None = None,
    good_with_pets: bool | None = None,
    energy_level: EnergyLevel | None = None,
    uploaded_by: int | None = None,
    search: str | None = None,
) -> Sequence[Pet]:
    """Return a filtered page of pets, newest first."""
    stmt = _base_pet_query()
    if adoption_status is not None:
        stmt = stmt.where(Pet.adoption_status == adoption_status)
    if breed:
        stmt = stmt.where(func.lower(Pet.breed).like(f"%{breed.lower()}%"))
    if age_min is not None:
        stmt = stmt.where(Pet.age >= age_min)
    if age_max is not None:
        stmt = stmt.where(Pet.age <= age_max)
    for column, value in (
        (Pet.gender, gender),
        (Pet.size, size),
        (Pet.health_status, health_status),
        (Pet.good_with_kids, good_with_kids),
        (Pet.good_with_pets, good_with_pets),
        (Pet.energy_level, energy_level),
        (Pet.uploaded_by, uploaded_by),
    ):
        if value is not None:
            stmt = stmt.where(column == value)
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Pet.name).like(pattern),
                func.lower(Pet.breed).like(pattern),
                func.lower(func.coalesce(Pet.description, "")).like(pattern),
            )
        )
    stmt = stmt.order_by(Pet.created_at.desc(), Pet.id.desc()).offset(skip).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_pet(
    session: AsyncSession, pet_id: int, *, reload: bool = False
) -> Pet | None:
    """Return a single pet with its uploader."""
    stmt = _base_pet_query().where(Pet.id == pet_id)
    if reload:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def require_pet(
    session: AsyncSession, pet_id: int, *, reload: bool = False
) -> Pet:
    pet = await get_pet(session, pet_id, reload=reload)
    if pet is None:
        raise NotFoundError("Pet not found", pet_id=pet_id)
    return pet


async def list_pets_for_user(
    session: AsyncSession, *, actor: Actor, user_id: int
) -> Sequence[Pet]:
    """Every pet a user has listed, whatever its state."""
    if actor.id != user_id and not actor.is_admin:
        raise ForbiddenError("You can only view your own pets")
    return await list_pets(
        session, adoption_status=None, uploaded_by=user_id, limit=1000
    )


async def create_pet(session: AsyncSession, *, actor: Actor, payload: PetCreate) -> Pet:
    """List a new pet as available under the acting shelter or admin."""
    require(actor, Action.PET_CREATE, message="Only shelters can list pets")
    _check_images(payload.images)
    pet = Pet(
        **payload.model_dump(),
        adoption_status=AdoptionStatus.AVAILABLE,
        uploaded_by=actor.id,
    )
    session.add(pet)
    await session.commit()
    logger.info("Pet %s listed by %s", pet.id, actor.id)
    return await require_pet(session, pet.id, reload=True)


async def update_pet(
    session: AsyncSession, *, actor: Actor, pet_id: int, payload: PetUpdate
) -> Pet:
    """Update a listing; only admins may override the adoption status."""
    pet = await require_pet(session, pet_id)
    require(actor, Action.PET_UPDATE, pet, message="You can only update your own pets")
    changes = payload.model_dump(exclude_unset=True)
    if "adoption_status" in changes and not can(actor, Action.PET_SET_STATUS, pet):
        raise ForbiddenError("Only admins can change a pet's adoption status")
    if changes.get("adoption_status") is None:
        changes.pop("adoption_status", None)
    _check_images(changes.get("images"))
    for field, value in changes.items():
        setattr(pet, field, value)
    await commit_transition(session, entity="pet", entity_id=pet.id)
    return await require_pet(session, pet.id, reload=True)


async def delete_pet(session: AsyncSession, *, actor: Actor, pet_id: int) -> None:
    """Delete a pet and its dependent rows unless an application is active."""
    pet = await require_pet(session, pet_id)
    require(actor, Action.PET_DELETE, pet, message="You can only delete your own pets")
    active = await session.scalar(
        select(func.count(Adoption.id)).where(
            Adoption.pet_id == pet.id, Adoption.status.in_(ACTIVE_STATUSES)
        )
    )
    if active:
        raise ConflictError(
            "Cannot delete pet with pending adoption requests",
            pet_id=pet.id,
            active_adoptions=active,
        )
    for model in (Favorite, Adoption, Donation, Document):
        await session.execute(delete(model).where(model.pet_id == pet.id))
    await session.delete(pet)
    await audit_service.record_event(
        session,
        event_type="pet.deleted",
        user_id=actor.id,
        description=f"Deleted pet {pet.name}",
        payload={"pet_id": pet.id},
        commit=False,
    )
    await commit_transition(session, entity="pet", entity_id=pet.id)
    logger.info("Pet %s deleted by %s", pet.id, actor.id)
