"""Versioned API router."""

from fastapi import APIRouter

from . import (
    adoptions,
    auth,
    dashboard,
    documents,
    donations,
    favorites,
    health,
    pets,
    users,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(pets.router, prefix="/pets", tags=["pets"])
router.include_router(adoptions.router, prefix="/adoptions", tags=["adoptions"])
router.include_router(donations.router, prefix="/donations", tags=["donations"])
router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

__all__ = ["router"]
