"""Adoption application endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.models.adoption import AdoptionRequestStatus
from petadopt.schemas.adoption import AdoptionCreate, AdoptionRead, AdoptionTransition
from petadopt.schemas.stats import AdoptionStats
from petadopt.security.permissions import Action, Actor, require
from petadopt.services import adoption_service, stats_service

router = APIRouter()


@router.get("", response_model=list[AdoptionRead], summary="List adoptions")
async def list_adoptions(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
    status_filter: AdoptionRequestStatus | None = Query(default=None, alias="status"),
    pet_id: int | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
) -> list[AdoptionRead]:
    """Adopters see their own applications; shelters those for their pets."""
    adoptions = await adoption_service.list_adoptions(
        session,
        actor=actor,
        status=status_filter,
        pet_id=pet_id,
        skip=skip,
        limit=deps.page_limit(limit),
    )
    return [AdoptionRead.model_validate(obj) for obj in adoptions]


@router.get(
    "/stats/overview", response_model=AdoptionStats, summary="Adoption counts"
)
async def adoption_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> AdoptionStats:
    require(actor, Action.STATS_VIEW, message="Admin access required")
    return await stats_service.adoption_stats(session)


@router.post(
    "",
    response_model=AdoptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to adopt a pet",
)
async def create_adoption(
    payload: AdoptionCreate,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> AdoptionRead:
    adoption = await adoption_service.create_adoption(
        session, actor=actor, payload=payload, ip_address=deps.client_ip(request)
    )
    return AdoptionRead.model_validate(adoption)


@router.get("/{adoption_id}", response_model=AdoptionRead, summary="Get adoption")
async def get_adoption(
    adoption_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> AdoptionRead:
    adoption = await adoption_service.get_adoption_for_actor(
        session, actor=actor, adoption_id=adoption_id
    )
    return AdoptionRead.model_validate(adoption)


@router.put(
    "/{adoption_id}", response_model=AdoptionRead, summary="Change adoption status"
)
async def transition_adoption(
    adoption_id: int,
    payload: AdoptionTransition,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> AdoptionRead:
    adoption = await adoption_service.apply_transition(
        session,
        actor=actor,
        adoption_id=adoption_id,
        status=payload.status,
        rejection_reason=payload.rejection_reason,
        admin_notes=payload.admin_notes,
        ip_address=deps.client_ip(request),
    )
    return AdoptionRead.model_validate(adoption)


@router.delete(
    "/{adoption_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete adoption",
)
async def delete_adoption(
    adoption_id: int,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> Response:
    await adoption_service.delete_adoption(
        session, actor=actor, adoption_id=adoption_id, ip_address=deps.client_ip(request)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
