"""Favorite relation manager.

Every operation is keyed by ``(user_id, pet_id)`` and is idempotent: adding an
existing favorite or removing a missing one changes nothing. The unique
constraint on the table is the final arbiter when two requests race.
"""

from __future__ import annotations

import logging
from typing import Literal, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petadopt.core.errors import NotFoundError
from petadopt.models import AdoptionStatus, Favorite, Pet

logger = logging.getLogger(__name__)

ToggleAction = Literal["added", "removed"]


async def _require_pet(session: AsyncSession, pet_id: int) -> Pet:
    pet = await session.get(Pet, pet_id)
    if pet is None:
        raise NotFoundError("Pet not found", pet_id=pet_id)
    return pet


async def get_favorite(
    session: AsyncSession, *, user_id: int, pet_id: int
) -> Favorite | None:
    result = await session.execute(
        select(Favorite).where(Favorite.user_id == user_id, Favorite.pet_id == pet_id)
    )
    return result.scalar_one_or_none()


async def check_favorited(session: AsyncSession, *, user_id: int, pet_id: int) -> bool:
    """Return whether the pair exists; never writes."""
    return await get_favorite(session, user_id=user_id, pet_id=pet_id) is not None


async def add_favorite(session: AsyncSession, *, user_id: int, pet_id: int) -> bool:
    """Insert the pair; returns ``False`` when it was already present."""
    await _require_pet(session, pet_id)
    if await check_favorited(session, user_id=user_id, pet_id=pet_id):
        return False
    session.add(Favorite(user_id=user_id, pet_id=pet_id))
    try:
        await session.commit()
    except IntegrityError:
        # A concurrent request inserted the same pair first.
        await session.rollback()
        logger.info("Duplicate favorite user=%s pet=%s ignored", user_id, pet_id)
        return False
    return True


async def remove_favorite(session: AsyncSession, *, user_id: int, pet_id: int) -> bool:
    """Delete the pair; returns ``False`` when nothing was removed."""
    result = await session.execute(
        delete(Favorite).where(Favorite.user_id == user_id, Favorite.pet_id == pet_id)
    )
    await session.commit()
    return bool(result.rowcount)


async def toggle_favorite(
    session: AsyncSession, *, user_id: int, pet_id: int
) -> ToggleAction:
    """Flip the pair and report which way it went."""
    if await check_favorited(session, user_id=user_id, pet_id=pet_id):
        await remove_favorite(session, user_id=user_id, pet_id=pet_id)
        return "removed"
    await add_favorite(session, user_id=user_id, pet_id=pet_id)
    return "added"


async def list_favorites(
    session: AsyncSession, *, user_id: int, skip: int = 0, limit: int = 50
) -> Sequence[Favorite]:
    """Return favorites most recently saved first, with pets loaded."""
    result = await session.execute(
        select(Favorite)
        .options(selectinload(Favorite.pet).selectinload(Pet.uploader))
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()


async def favorite_stats(session: AsyncSession, *, user_id: int) -> dict[str, int]:
    """Count a user's favorites by the pets' current listing state."""
    result = await session.execute(
        select(Pet.adoption_status, func.count(Favorite.id))
        .join(Favorite.pet)
        .where(Favorite.user_id == user_id)
        .group_by(Pet.adoption_status)
    )
    counts = {status.value: 0 for status in AdoptionStatus}
    for status, count in result.all():
        counts[status.value] = count
    return {"total": sum(counts.values()), **counts}
