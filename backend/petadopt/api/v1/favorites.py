"""Favorite pet endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.schemas.favorite import (
    FavoriteCheck,
    FavoriteRead,
    FavoriteStats,
    FavoriteToggle,
)
from petadopt.schemas.pet import PetRead
from petadopt.security.permissions import Actor
from petadopt.services import favorite_service

router = APIRouter()


@router.get("", response_model=list[FavoriteRead], summary="List favorite pets")
async def list_favorites(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
) -> list[FavoriteRead]:
    """Most recently saved first."""
    favorites = await favorite_service.list_favorites(
        session, user_id=actor.id, skip=skip, limit=deps.page_limit(limit)
    )
    return [
        FavoriteRead(
            favorite_id=fav.id,
            favorited_at=fav.created_at,
            pet=PetRead.model_validate(fav.pet),
        )
        for fav in favorites
    ]


@router.get("/stats", response_model=FavoriteStats, summary="Favorite counts")
async def favorite_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> FavoriteStats:
    counts = await favorite_service.favorite_stats(session, user_id=actor.id)
    return FavoriteStats(**counts)


@router.get(
    "/check/{pet_id}", response_model=FavoriteCheck, summary="Is pet favorited"
)
async def check_favorite(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> FavoriteCheck:
    favorited = await favorite_service.check_favorited(
        session, user_id=actor.id, pet_id=pet_id
    )
    return FavoriteCheck(pet_id=pet_id, is_favorited=favorited)


@router.post(
    "/{pet_id}/toggle", response_model=FavoriteToggle, summary="Toggle favorite"
)
async def toggle_favorite(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> FavoriteToggle:
    action = await favorite_service.toggle_favorite(
        session, user_id=actor.id, pet_id=pet_id
    )
    return FavoriteToggle(action=action, is_favorited=action == "added")


@router.post("/{pet_id}", response_model=FavoriteCheck, summary="Add favorite")
async def add_favorite(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> FavoriteCheck:
    """Saving a pet twice is a no-op."""
    await favorite_service.add_favorite(session, user_id=actor.id, pet_id=pet_id)
    return FavoriteCheck(pet_id=pet_id, is_favorited=True)


@router.delete("/{pet_id}", response_model=FavoriteCheck, summary="Remove favorite")
async def remove_favorite(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> FavoriteCheck:
    """Removing a pet that is not saved is a no-op."""
    await favorite_service.remove_favorite(session, user_id=actor.id, pet_id=pet_id)
    return FavoriteCheck(pet_id=pet_id, is_favorited=False)
