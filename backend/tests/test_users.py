"""User administration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_admin_manages_users(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin = await _authenticate(client, app_context["admin_email"], app_context["password"])

    created = await client.post(
        "/api/v1/users",
        json={
            "name": "Casey Volunteer",
            "email": "casey@petadopt.com",
            "password": "secret123",
            "role": "shelter",
        },
        headers=admin,
    )
    assert created.status_code == 201
    user_id = created.json()["id"]

    duplicate = await client.post(
        "/api/v1/users",
        json={"name": "Casey Again", "email": "casey@petadopt.com", "password": "secret123"},
        headers=admin,
    )
    assert duplicate.status_code == 409

    shelters = await client.get("/api/v1/users", params={"role": "shelter"}, headers=admin)
    assert {item["email"] for item in shelters.json()} == {
        "casey@petadopt.com",
        "shelter@petadopt.com",
        "rescue@petadopt.com",
    }

    search = await client.get("/api/v1/users", params={"q": "riley"}, headers=admin)
    assert [item["email"] for item in search.json()] == ["riley@petadopt.com"]

    updated = await client.patch(
        f"/api/v1/users/{user_id}", json={"phone": "555-0123"}, headers=admin
    )
    assert updated.json()["phone"] == "555-0123"

    clash = await client.patch(
        f"/api/v1/users/{user_id}",
        json={"email": app_context["user_email"]},
        headers=admin,
    )
    assert clash.status_code == 409

    fetched = await client.get(f"/api/v1/users/{user_id}", headers=admin)
    assert fetched.json()["role"] == "shelter"

    deleted = await client.delete(f"/api/v1/users/{user_id}", headers=admin)
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/users/{user_id}", headers=admin)).status_code == 404


async def test_non_admins_cannot_manage_users(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    shelter = await _authenticate(
        client, app_context["shelter_email"], app_context["password"]
    )
    assert (await client.get("/api/v1/users", headers=shelter)).status_code == 403
    assert (
        await client.delete(f"/api/v1/users/{app_context['user_id']}", headers=shelter)
    ).status_code == 403


async def test_admin_cannot_remove_self(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    admin = await _authenticate(client, app_context["admin_email"], app_context["password"])
    admin_id = app_context["admin_id"]

    deactivate = await client.patch(
        f"/api/v1/users/{admin_id}/status", json={"is_active": False}, headers=admin
    )
    assert deactivate.status_code == 403
    delete = await client.delete(f"/api/v1/users/{admin_id}", headers=admin)
    assert delete.status_code == 403


async def test_delete_blocked_by_active_listings(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    admin = await _authenticate(client, app_context["admin_email"], app_context["password"])
    response = await client.delete(
        f"/api/v1/users/{app_context['shelter_id']}", headers=admin
    )
    assert response.status_code == 409
    assert response.json()["context"]["active_pets"] == 1


async def test_public_shelter_directory(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/users/shelters")
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == [
        "Happy Paws Shelter",
        "Second Chance Rescue",
    ]


async def test_deleting_adopter_releases_approved_pet(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    adopter = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)

    applied = await client.post(
        "/api/v1/adoptions",
        json={"pet_id": available_pet, "application_message": "Big garden"},
        headers=adopter,
    )
    assert applied.status_code == 201
    approved = await client.put(
        f"/api/v1/adoptions/{applied.json()['id']}",
        json={"status": "approved"},
        headers=shelter,
    )
    assert approved.status_code == 200

    deleted = await client.delete(
        f"/api/v1/users/{app_context['user_id']}", headers=admin
    )
    assert deleted.status_code == 204

    pet = await client.get(f"/api/v1/pets/{available_pet}")
    assert pet.json()["adoption_status"] == "available"

    other = await _authenticate(client, app_context["user2_email"], password)
    reapplied = await client.post(
        "/api/v1/adoptions",
        json={"pet_id": available_pet, "application_message": "Quiet flat"},
        headers=other,
    )
    assert reapplied.status_code == 201
