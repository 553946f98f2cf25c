"""Donation request endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.models.donation import DonationStatus
from petadopt.schemas.donation import DonationCreate, DonationRead, DonationTransition
from petadopt.schemas.stats import DonationStats
from petadopt.security.permissions import Action, Actor, require
from petadopt.services import donation_service, stats_service

router = APIRouter()


@router.get("", response_model=list[DonationRead], summary="List donations")
async def list_donations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
    status_filter: DonationStatus | None = Query(default=None, alias="status"),
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
) -> list[DonationRead]:
    """Donors see what they filed; shelters what was addressed to them."""
    donations = await donation_service.list_donations(
        session,
        actor=actor,
        status=status_filter,
        skip=skip,
        limit=deps.page_limit(limit),
    )
    return [DonationRead.model_validate(obj) for obj in donations]


@router.get(
    "/stats/overview", response_model=DonationStats, summary="Donation counts"
)
async def donation_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DonationStats:
    require(actor, Action.STATS_VIEW, message="Admin access required")
    return await stats_service.donation_stats(session)


@router.post(
    "",
    response_model=DonationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Offer a pet to a shelter",
)
async def create_donation(
    payload: DonationCreate,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DonationRead:
    donation = await donation_service.create_donation(
        session, actor=actor, payload=payload, ip_address=deps.client_ip(request)
    )
    return DonationRead.model_validate(donation)


@router.get("/{donation_id}", response_model=DonationRead, summary="Get donation")
async def get_donation(
    donation_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DonationRead:
    donation = await donation_service.get_donation_for_actor(
        session, actor=actor, donation_id=donation_id
    )
    return DonationRead.model_validate(donation)


@router.put(
    "/{donation_id}", response_model=DonationRead, summary="Change donation status"
)
async def transition_donation(
    donation_id: int,
    payload: DonationTransition,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DonationRead:
    donation = await donation_service.apply_transition(
        session,
        actor=actor,
        donation_id=donation_id,
        status=payload.status,
        admin_notes=payload.admin_notes,
        pickup_date=payload.pickup_date,
        notes=payload.notes,
        ip_address=deps.client_ip(request),
    )
    return DonationRead.model_validate(donation)


@router.delete(
    "/{donation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete donation",
)
async def delete_donation(
    donation_id: int,
    request: Request,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> Response:
    await donation_service.delete_donation(
        session, actor=actor, donation_id=donation_id, ip_address=deps.client_ip(request)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
