"""Schemas for the favorites relation."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from petadopt.schemas.pet import PetRead


class FavoriteRead(BaseModel):
    """A favorited pet with the time it was saved."""

    favorite_id: int
    favorited_at: datetime
    pet: PetRead

    model_config = ConfigDict(from_attributes=True)


class FavoriteToggle(BaseModel):
    action: Literal["added", "removed"]
    is_favorited: bool


class FavoriteCheck(BaseModel):
    pet_id: int
    is_favorited: bool


class FavoriteStats(BaseModel):
    total: int = 0
    available: int = 0
    pending: int = 0
    adopted: int = 0
