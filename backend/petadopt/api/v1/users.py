"""User administration endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.models.user import UserRole
from petadopt.schemas.stats import UserStats
from petadopt.schemas.user import (
    ShelterRead,
    UserCreate,
    UserRead,
    UserStatusUpdate,
    UserUpdate,
)
from petadopt.security.permissions import Action, Actor, require
from petadopt.services import stats_service, user_service

router = APIRouter()


def _assert_manage_users_permission(actor: Actor) -> None:
    require(actor, Action.USER_MANAGE, message="Admin access required")


@router.get("/shelters", response_model=list[ShelterRead], summary="List shelters")
async def list_shelters(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[ShelterRead]:
    """Public directory of active shelters (used by the donation form)."""
    shelters = await user_service.list_shelters(session)
    return [ShelterRead.model_validate(obj) for obj in shelters]


@router.get(
    "/stats/overview", response_model=UserStats, summary="User counts by role"
)
async def user_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> UserStats:
    require(actor, Action.STATS_VIEW, message="Admin access required")
    return await stats_service.user_stats(session)


@router.get("", response_model=list[UserRead], summary="List users")
async def list_users(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
    role: UserRole | None = None,
    is_active: bool | None = None,
    q: str | None = Query(default=None, alias="q"),
) -> list[UserRead]:
    """Return paginated users, newest first."""
    _assert_manage_users_permission(actor)
    users = await user_service.list_users(
        session,
        skip=skip,
        limit=deps.page_limit(limit),
        role=role,
        is_active=is_active,
        search=q,
    )
    return [UserRead.model_validate(obj) for obj in users]


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    payload: UserCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> UserRead:
    _assert_manage_users_permission(actor)
    user = await user_service.create_user(session, payload)
    return UserRead.model_validate(user)


@router.get("/{user_id}", response_model=UserRead, summary="Get user by ID")
async def read_user(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> UserRead:
    _assert_manage_users_permission(actor)
    user = await user_service.require_user(session, user_id)
    return UserRead.model_validate(user)


@router.patch("/{user_id}", response_model=UserRead, summary="Update user")
async def update_user(
    user_id: int,
    payload: UserUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> UserRead:
    _assert_manage_users_permission(actor)
    user = await user_service.require_user(session, user_id)
    updated = await user_service.update_user(session, user, payload, actor=actor)
    return UserRead.model_validate(updated)


@router.patch(
    "/{user_id}/status", response_model=UserRead, summary="Activate or deactivate"
)
async def update_user_status(
    user_id: int,
    payload: UserStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> UserRead:
    _assert_manage_users_permission(actor)
    user = await user_service.require_user(session, user_id)
    updated = await user_service.set_user_status(
        session, user, is_active=payload.is_active, actor=actor
    )
    return UserRead.model_validate(updated)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete user"
)
async def delete_user(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> Response:
    _assert_manage_users_permission(actor)
    user = await user_service.require_user(session, user_id)
    await user_service.delete_user(session, user, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
