"""Favorite relation tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from petadopt.db.session import get_sessionmaker
from petadopt.services import favorite_service

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_toggle_flips_and_reports(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(client, app_context["user_email"], app_context["password"])

    first = await client.post(f"/api/v1/favorites/{available_pet}/toggle", headers=headers)
    assert first.json() == {"action": "added", "is_favorited": True}
    check = await client.get(f"/api/v1/favorites/check/{available_pet}", headers=headers)
    assert check.json() == {"pet_id": available_pet, "is_favorited": True}

    second = await client.post(f"/api/v1/favorites/{available_pet}/toggle", headers=headers)
    assert second.json() == {"action": "removed", "is_favorited": False}
    check = await client.get(f"/api/v1/favorites/check/{available_pet}", headers=headers)
    assert check.json()["is_favorited"] is False


async def test_add_and_remove_are_idempotent(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(client, app_context["user_email"], app_context["password"])

    for _ in range(2):
        response = await client.post(f"/api/v1/favorites/{available_pet}", headers=headers)
        assert response.status_code == 200
        assert response.json()["is_favorited"] is True

    listing = await client.get("/api/v1/favorites", headers=headers)
    assert len(listing.json()) == 1
    assert listing.json()[0]["pet"]["id"] == available_pet
    assert listing.json()[0]["pet"]["uploader"]["id"] == app_context["shelter_id"]

    for _ in range(2):
        response = await client.delete(f"/api/v1/favorites/{available_pet}", headers=headers)
        assert response.status_code == 200
        assert response.json()["is_favorited"] is False

    assert (await client.get("/api/v1/favorites", headers=headers)).json() == []


async def test_favorites_are_per_user(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    first = await _authenticate(client, app_context["user_email"], password)
    second = await _authenticate(client, app_context["user2_email"], password)

    await client.post(f"/api/v1/favorites/{available_pet}", headers=first)
    other = await client.get(f"/api/v1/favorites/check/{available_pet}", headers=second)
    assert other.json()["is_favorited"] is False
    assert (await client.get("/api/v1/favorites", headers=second)).json() == []


async def test_favoriting_missing_pet_is_not_found(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(client, app_context["user_email"], app_context["password"])
    response = await client.post("/api/v1/favorites/9999", headers=headers)
    assert response.status_code == 404
    toggle = await client.post("/api/v1/favorites/9999/toggle", headers=headers)
    assert toggle.status_code == 404


async def test_stats_follow_pet_status(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    headers = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)

    empty = await client.get("/api/v1/favorites/stats", headers=headers)
    assert empty.json() == {"total": 0, "available": 0, "pending": 0, "adopted": 0}

    second_pet = await client.post(
        "/api/v1/pets",
        json={"name": "Clover", "breed": "Lop Rabbit", "age": 1, "gender": "female", "size": "small"},
        headers=shelter,
    )
    await client.post(f"/api/v1/favorites/{available_pet}", headers=headers)
    await client.post(f"/api/v1/favorites/{second_pet.json()['id']}", headers=headers)
    await client.post(
        "/api/v1/adoptions",
        json={"pet_id": available_pet, "application_message": "Please!"},
        headers=headers,
    )

    stats = (await client.get("/api/v1/favorites/stats", headers=headers)).json()
    listing = (await client.get("/api/v1/favorites", headers=headers)).json()
    assert stats == {"total": 2, "available": 1, "pending": 1, "adopted": 0}
    assert stats["total"] == len(listing)


async def test_duplicate_insert_reports_false(
    app_context: dict[str, Any], available_pet: int
) -> None:
    sessionmaker = get_sessionmaker(app_context["db_url"])
    user_id = app_context["user_id"]
    async with sessionmaker() as session:
        assert await favorite_service.add_favorite(session, user_id=user_id, pet_id=available_pet)
        assert not await favorite_service.add_favorite(
            session, user_id=user_id, pet_id=available_pet
        )
        assert await favorite_service.toggle_favorite(
            session, user_id=user_id, pet_id=available_pet
        ) == "removed"
        assert not await favorite_service.remove_favorite(
            session, user_id=user_id, pet_id=available_pet
        )
