"""Load demo users, pets, adoptions, donations and favorites.

Run after ``alembic upgrade head``; does nothing when the demo admin exists.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from petadopt.core.config import get_settings
from petadopt.core.security import hash_password
from petadopt.db.session import get_sessionmaker
from petadopt.models import (
    Adoption,
    AdoptionRequestStatus,
    AdoptionStatus,
    Donation,
    DonationStatus,
    EnergyLevel,
    Favorite,
    HealthStatus,
    Pet,
    PetGender,
    PetSize,
    User,
    UserRole,
)

PASSWORD = "password123"

USERS = [
    ("Admin User", "admin@petadoption.com", UserRole.ADMIN, "123 Admin Street"),
    ("Happy Paws Shelter", "shelter@happypaws.com", UserRole.SHELTER, "456 Shelter Avenue"),
    ("Loving Hearts Animal Rescue", "contact@lovinghearts.org", UserRole.SHELTER, "789 Rescue Road"),
    ("John Doe", "john@example.com", UserRole.USER, "321 User Lane"),
    ("Jane Smith", "jane@example.com", UserRole.USER, "654 Adopter Street"),
    ("Pet Paradise Shelter", "info@petparadise.com", UserRole.SHELTER, "987 Paradise Blvd"),
]

# name, breed, age, gender, size, energy, listing state, index of uploading user
PETS = [
    ("Buddy", "Golden Retriever", 3, PetGender.MALE, PetSize.LARGE, EnergyLevel.HIGH, AdoptionStatus.PENDING, 1),
    ("Luna", "Siamese Cat", 2, PetGender.FEMALE, PetSize.SMALL, EnergyLevel.MEDIUM, AdoptionStatus.AVAILABLE, 1),
    ("Max", "German Shepherd", 4, PetGender.MALE, PetSize.LARGE, EnergyLevel.HIGH, AdoptionStatus.PENDING, 2),
    ("Bella", "Labrador Mix", 1, PetGender.FEMALE, PetSize.MEDIUM, EnergyLevel.HIGH, AdoptionStatus.AVAILABLE, 5),
    ("Whiskers", "Persian Cat", 5, PetGender.MALE, PetSize.SMALL, EnergyLevel.LOW, AdoptionStatus.AVAILABLE, 2),
    ("Rocky", "Bulldog", 6, PetGender.MALE, PetSize.MEDIUM, EnergyLevel.LOW, AdoptionStatus.AVAILABLE, 1),
    ("Mia", "Border Collie", 2, PetGender.FEMALE, PetSize.MEDIUM, EnergyLevel.HIGH, AdoptionStatus.PENDING, 5),
]


def _days(offset: int) -> datetime:
    return datetime.now(UTC) + timedelta(days=offset)


async def main() -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await session.execute(
            select(User.id).where(User.email == USERS[0][1])
        )
        if existing.first():
            print(f"Demo data already present ({USERS[0][1]})")
            return

        hashed = hash_password(PASSWORD)
        users = [
            User(
                name=name,
                email=email,
                hashed_password=hashed,
                role=role,
                phone=f"+123456789{index}",
                address=f"{street}, City, State 12345",
            )
            for index, (name, email, role, street) in enumerate(USERS)
        ]
        session.add_all(users)
        await session.flush()
        admin, happy_paws, _, john, jane, paradise = users

        pets = [
            Pet(
                name=name,
                breed=breed,
                age=age,
                gender=gender,
                size=size,
                energy_level=energy,
                adoption_status=status,
                health_status=HealthStatus.HEALTHY,
                vaccination_status=True,
                spayed_neutered=True,
                adoption_fee=Decimal("150.00"),
                images=[],
                description=f"{name} is a friendly {breed.lower()} looking for a home.",
                uploaded_by=users[uploader].id,
            )
            for name, breed, age, gender, size, energy, status, uploader in PETS
        ]
        session.add_all(pets)
        await session.flush()
        buddy, luna, max_, bella, whiskers, rocky, mia = pets

        session.add_all(
            [
                Adoption(
                    pet_id=max_.id,
                    user_id=john.id,
                    status=AdoptionRequestStatus.PENDING,
                    application_message=(
                        "I have experience with large dogs and would love to give "
                        "Max a loving home."
                    ),
                    contact_phone=john.phone,
                    contact_address=john.address,
                    living_situation="House with a large fenced backyard.",
                    other_pets="No other pets currently",
                ),
                Adoption(
                    pet_id=buddy.id,
                    user_id=jane.id,
                    status=AdoptionRequestStatus.APPROVED,
                    application_message=(
                        "My family and I are looking for a friendly dog to join "
                        "our household."
                    ),
                    admin_notes="Great family match. Approved after home visit.",
                    approved_by=admin.id,
                    approved_at=_days(-2),
                    contact_phone=jane.phone,
                    contact_address=jane.address,
                ),
                Adoption(
                    pet_id=luna.id,
                    user_id=john.id,
                    status=AdoptionRequestStatus.REJECTED,
                    application_message=(
                        "I would like to adopt Luna as I work from home and can "
                        "provide constant companionship."
                    ),
                    admin_notes="Applicant already has a pending application for another pet.",
                    rejection_reason=(
                        "Multiple pending applications not allowed. Please complete "
                        "current adoption process first."
                    ),
                    contact_phone=john.phone,
                    contact_address=john.address,
                ),
                Donation(
                    pet_id=bella.id,
                    shelter_id=paradise.id,
                    donor_name="Sarah Johnson",
                    donor_email="sarah.johnson@email.com",
                    donation_reason="Moving to an apartment that doesn't allow pets",
                    status=DonationStatus.COMPLETED,
                    date=_days(-7),
                    pickup_date=_days(-5),
                    admin_notes="Healthy puppy, all documentation provided",
                    processed_by=admin.id,
                    processed_at=_days(-6),
                ),
                Donation(
                    pet_id=rocky.id,
                    shelter_id=happy_paws.id,
                    donor_name="Michael Brown",
                    donor_email="mike.brown@email.com",
                    donation_reason="Unable to care for senior dog due to work commitments",
                    status=DonationStatus.ACCEPTED,
                    date=_days(-4),
                    pickup_date=_days(2),
                    notes="Rocky needs his arthritis medication twice daily",
                    processed_by=happy_paws.id,
                    processed_at=_days(-3),
                ),
                Donation(
                    pet_id=mia.id,
                    shelter_id=paradise.id,
                    donor_name="Lisa Wilson",
                    donor_email="lisa.wilson@email.com",
                    donation_reason="Family emergency requires relocation",
                    status=DonationStatus.PENDING,
                    date=_days(-1),
                    notes="Mia needs an active family who can provide mental stimulation",
                ),
            ]
        )

        favorites = [
            (john, buddy, -7),
            (john, luna, -5),
            (john, max_, -2),
            (jane, bella, -6),
            (jane, whiskers, -3),
            (jane, buddy, -4),
        ]
        session.add_all(
            Favorite(user_id=user.id, pet_id=pet.id, created_at=_days(offset))
            for user, pet, offset in favorites
        )

        await session.commit()
        print(f"Seeded {len(users)} users and {len(pets)} pets; password {PASSWORD}")


if __name__ == "__main__":
    asyncio.run(main())
