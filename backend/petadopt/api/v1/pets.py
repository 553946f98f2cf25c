"""Pet listing API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.models.pet import (
    AdoptionStatus,
    EnergyLevel,
    HealthStatus,
    PetGender,
    PetSize,
)
from petadopt.schemas.pet import PetCreate, PetRead, PetUpdate
from petadopt.schemas.stats import PetStats
from petadopt.security.permissions import Action, Actor, require
from petadopt.services import pet_service, stats_service

router = APIRouter()


@router.get("", response_model=list[PetRead], summary="Browse pets")
async def list_pets(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
    adoption_status: AdoptionStatus | None = AdoptionStatus.AVAILABLE,
    breed: str | None = None,
    age_min: int | None = Query(default=None, ge=0),
    age_max: int | None = Query(default=None, le=30),
    gender: PetGender | None = None,
    size: PetSize | None = None,
    health_status: HealthStatus | None = None,
    good_with_kids: bool | None = None,
    good_with_pets: bool | None = None,
    energy_level: EnergyLevel | None = None,
    q: str | None = Query(default=None, alias="q"),
) -> list[PetRead]:
    """Public catalogue; defaults to pets that are available for adoption."""
    pets = await pet_service.list_pets(
        session,
        skip=skip,
        limit=deps.page_limit(limit),
        adoption_status=adoption_status,
        breed=breed,
        age_min=age_min,
        age_max=age_max,
        gender=gender,
        size=size,
        health_status=health_status,
        good_with_kids=good_with_kids,
        good_with_pets=good_with_pets,
        energy_level=energy_level,
        search=q,
    )
    return [PetRead.model_validate(pet) for pet in pets]


@router.get("/stats/overview", response_model=PetStats, summary="Pet counts")
async def pet_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> PetStats:
    require(actor, Action.STATS_VIEW, message="Admin access required")
    return await stats_service.pet_stats(session)


@router.get(
    "/user/{user_id}", response_model=list[PetRead], summary="Pets listed by a user"
)
async def list_user_pets(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> list[PetRead]:
    pets = await pet_service.list_pets_for_user(session, actor=actor, user_id=user_id)
    return [PetRead.model_validate(pet) for pet in pets]


@router.post(
    "",
    response_model=PetRead,
    status_code=status.HTTP_201_CREATED,
    summary="List a pet",
)
async def create_pet(
    payload: PetCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> PetRead:
    pet = await pet_service.create_pet(session, actor=actor, payload=payload)
    return PetRead.model_validate(pet)


@router.get("/{pet_id}", response_model=PetRead, summary="Get pet")
async def get_pet(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PetRead:
    pet = await pet_service.require_pet(session, pet_id)
    return PetRead.model_validate(pet)


@router.patch("/{pet_id}", response_model=PetRead, summary="Update pet")
async def update_pet(
    pet_id: int,
    payload: PetUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> PetRead:
    pet = await pet_service.update_pet(
        session, actor=actor, pet_id=pet_id, payload=payload
    )
    return PetRead.model_validate(pet)


@router.delete(
    "/{pet_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete pet"
)
async def delete_pet(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> Response:
    await pet_service.delete_pet(session, actor=actor, pet_id=pet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
