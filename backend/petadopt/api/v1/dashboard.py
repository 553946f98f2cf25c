"""Dashboard read models, polled by the frontend."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.schemas.stats import DashboardSummary, NotificationCounts
from petadopt.security.permissions import Actor
from petadopt.services import stats_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary, summary="Dashboard counters")
async def dashboard_summary(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DashboardSummary:
    return await stats_service.dashboard_summary(session, actor=actor)


@router.get(
    "/notifications",
    response_model=NotificationCounts,
    summary="Pending work counters",
)
async def notifications(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> NotificationCounts:
    """Cheap counts intended for polling every few seconds."""
    return await stats_service.notification_counts(session, actor=actor)
