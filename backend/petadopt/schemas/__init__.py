"""Schema exports."""

from petadopt.schemas.adoption import AdoptionCreate, AdoptionRead, AdoptionTransition
from petadopt.schemas.auth import (
    ProfileUpdate,
    RegistrationRequest,
    RegistrationResponse,
    Token,
)
from petadopt.schemas.document import DocumentCreate, DocumentRead, DocumentVerify
from petadopt.schemas.donation import DonationCreate, DonationRead, DonationTransition
from petadopt.schemas.favorite import (
    FavoriteCheck,
    FavoriteRead,
    FavoriteStats,
    FavoriteToggle,
)
from petadopt.schemas.pet import PetCreate, PetRead, PetSummary, PetUpdate
from petadopt.schemas.stats import (
    AdoptionStats,
    BreedCount,
    DashboardSummary,
    DonationStats,
    NotificationCounts,
    PetStats,
    UserStats,
)
from petadopt.schemas.user import (
    ShelterRead,
    UserCreate,
    UserRead,
    UserStatusUpdate,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "AdoptionCreate",
    "AdoptionRead",
    "AdoptionStats",
    "AdoptionTransition",
    "BreedCount",
    "DashboardSummary",
    "DocumentCreate",
    "DocumentRead",
    "DocumentVerify",
    "DonationCreate",
    "DonationRead",
    "DonationStats",
    "DonationTransition",
    "FavoriteCheck",
    "FavoriteRead",
    "FavoriteStats",
    "FavoriteToggle",
    "NotificationCounts",
    "PetCreate",
    "PetRead",
    "PetStats",
    "PetSummary",
    "PetUpdate",
    "ProfileUpdate",
    "RegistrationRequest",
    "RegistrationResponse",
    "ShelterRead",
    "Token",
    "UserCreate",
    "UserRead",
    "UserStats",
    "UserStatusUpdate",
    "UserSummary",
    "UserUpdate",
]
