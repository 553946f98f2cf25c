"""Test fixtures for the PetAdopt backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from petadopt.core.config import get_settings
from petadopt.core.security import hash_password
from petadopt.db.base import Base
from petadopt.db.session import dispose_engine, get_sessionmaker
from petadopt.main import app
from petadopt.models import Pet, PetGender, PetSize, User, UserRole

PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: AsyncIterator[None], db_url: str
) -> AsyncIterator[dict[str, Any]]:
    """Yield an async client plus one seeded account per role."""
    sessionmaker = get_sessionmaker(db_url)
    hashed = hash_password(PASSWORD)

    async with sessionmaker() as session:
        people = {
            "admin": User(
                name="Avery Admin",
                email="admin@petadopt.com",
                hashed_password=hashed,
                role=UserRole.ADMIN,
            ),
            "shelter": User(
                name="Happy Paws Shelter",
                email="shelter@petadopt.com",
                hashed_password=hashed,
                role=UserRole.SHELTER,
                phone="555-0100",
                address="1 Shelter Way",
            ),
            "shelter2": User(
                name="Second Chance Rescue",
                email="rescue@petadopt.com",
                hashed_password=hashed,
                role=UserRole.SHELTER,
            ),
            "user": User(
                name="Jordan Adopter",
                email="jordan@petadopt.com",
                hashed_password=hashed,
                role=UserRole.USER,
                phone="555-0101",
            ),
            "user2": User(
                name="Riley Adopter",
                email="riley@petadopt.com",
                hashed_password=hashed,
                role=UserRole.USER,
            ),
        }
        session.add_all(people.values())
        await session.commit()

        context: dict[str, Any] = {"password": PASSWORD, "db_url": db_url}
        for key, user in people.items():
            context[f"{key}_id"] = user.id
            context[f"{key}_email"] = user.email

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context


@pytest_asyncio.fixture()
async def available_pet(app_context: dict[str, Any]) -> int:
    """Seed a pet listed by the context's shelter and return its id."""
    sessionmaker = get_sessionmaker(app_context["db_url"])
    async with sessionmaker() as session:
        pet = Pet(
            name="Biscuit",
            breed="Beagle",
            age=3,
            gender=PetGender.MALE,
            size=PetSize.MEDIUM,
            adoption_fee=Decimal("75.00"),
            images=[],
            uploaded_by=app_context["shelter_id"],
        )
        session.add(pet)
        await session.commit()
        return pet.id
