"""ORM models package export."""

from petadopt.models.adoption import Adoption, AdoptionRequestStatus
from petadopt.models.audit_event import AuditEvent
from petadopt.models.document import Document, DocumentType
from petadopt.models.donation import Donation, DonationStatus
from petadopt.models.favorite import Favorite
from petadopt.models.pet import (
    AdoptionStatus,
    EnergyLevel,
    HealthStatus,
    Pet,
    PetGender,
    PetSize,
)
from petadopt.models.user import User, UserRole

__all__ = [
    "Adoption",
    "AdoptionRequestStatus",
    "AdoptionStatus",
    "AuditEvent",
    "Document",
    "DocumentType",
    "Donation",
    "DonationStatus",
    "EnergyLevel",
    "Favorite",
    "HealthStatus",
    "Pet",
    "PetGender",
    "PetSize",
    "User",
    "UserRole",
]
