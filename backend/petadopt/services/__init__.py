"""Service layer exports."""
from petadopt.services import (
    adoption_service,
    audit_service,
    auth_service,
    document_service,
    donation_service,
    favorite_service,
    pet_service,
    stats_service,
    user_service,
)

__all__ = [
    "adoption_service",
    "audit_service",
    "auth_service",
    "document_service",
    "donation_service",
    "favorite_service",
    "pet_service",
    "stats_service",
    "user_service",
]
