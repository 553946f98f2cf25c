"""Donation workflow tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
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


async def _donate(
    client: AsyncClient, headers: dict[str, str], shelter_id: int
) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/donations",
        json={
            "shelter_id": shelter_id,
            "donation_reason": "Moving overseas",
            "pet": {
                "name": "Marble",
                "breed": "Tabby Cat",
                "age": 4,
                "gender": "female",
                "size": "small",
            },
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_donation_accept_and_complete(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    donor = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)

    donation = await _donate(client, donor, app_context["shelter_id"])
    assert donation["status"] == "pending"
    assert donation["donor_id"] == app_context["user_id"]
    assert donation["donor_name"] == "Jordan Adopter"
    assert donation["donor_email"] == app_context["user_email"]
    assert donation["pet"]["adoption_status"] == "pending"
    pet_id = donation["pet_id"]

    catalogue = await client.get("/api/v1/pets")
    assert all(item["id"] != pet_id for item in catalogue.json())

    no_date = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "accepted"},
        headers=shelter,
    )
    assert no_date.status_code == 422
    assert no_date.json()["context"] == {"field": "pickup_date"}

    pickup = (datetime.now(UTC) + timedelta(days=2)).isoformat()
    accepted = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "accepted", "pickup_date": pickup},
        headers=shelter,
    )
    assert accepted.status_code == 200
    body = accepted.json()
    assert body["status"] == "accepted"
    assert body["processed_by"] == app_context["shelter_id"]
    assert body["pickup_date"] is not None

    pet = (await client.get(f"/api/v1/pets/{pet_id}")).json()
    assert pet["adoption_status"] == "available"
    assert pet["uploaded_by"] == app_context["shelter_id"]

    still_visible = await client.get(f"/api/v1/donations/{donation['id']}", headers=donor)
    assert still_visible.status_code == 200

    shelter_complete = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "completed"},
        headers=shelter,
    )
    assert shelter_complete.status_code == 403

    completed = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "completed", "notes": "Picked up on time"},
        headers=admin,
    )
    assert completed.status_code == 200
    assert completed.json()["notes"] == "Picked up on time"


async def test_donation_rejection_requires_notes(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    donor = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    donation = await _donate(client, donor, app_context["shelter_id"])

    missing = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "rejected"},
        headers=shelter,
    )
    assert missing.status_code == 422

    rejected = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "rejected", "admin_notes": "At capacity this month"},
        headers=shelter,
    )
    assert rejected.status_code == 200
    assert rejected.json()["admin_notes"] == "At capacity this month"

    again = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "accepted", "pickup_date": datetime.now(UTC).isoformat()},
        headers=shelter,
    )
    assert again.status_code == 400
    assert again.json()["error"] == "invalid_transition"


async def test_donation_scoping(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    donor = await _authenticate(client, app_context["user_email"], password)
    stranger = await _authenticate(client, app_context["user2_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    other_shelter = await _authenticate(client, app_context["shelter2_email"], password)
    donation = await _donate(client, donor, app_context["shelter_id"])

    assert len((await client.get("/api/v1/donations", headers=donor)).json()) == 1
    assert (await client.get("/api/v1/donations", headers=stranger)).json() == []
    assert len((await client.get("/api/v1/donations", headers=shelter)).json()) == 1
    assert (await client.get("/api/v1/donations", headers=other_shelter)).json() == []

    denied = await client.get(f"/api/v1/donations/{donation['id']}", headers=stranger)
    assert denied.status_code == 403

    foreign = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "rejected", "admin_notes": "Not ours"},
        headers=other_shelter,
    )
    assert foreign.status_code == 403

    donor_accept = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={"status": "accepted", "pickup_date": datetime.now(UTC).isoformat()},
        headers=donor,
    )
    assert donor_accept.status_code == 403


async def test_donation_to_unknown_shelter(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    donor = await _authenticate(client, app_context["user_email"], app_context["password"])
    for shelter_id in (9999, app_context["user2_id"]):
        response = await client.post(
            "/api/v1/donations",
            json={
                "shelter_id": shelter_id,
                "pet": {
                    "name": "Ghost",
                    "breed": "Husky",
                    "age": 1,
                    "gender": "male",
                    "size": "large",
                },
            },
            headers=donor,
        )
        assert response.status_code == 404


async def test_admin_deletes_donation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    donor = await _authenticate(client, app_context["user_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)
    donation = await _donate(client, donor, app_context["shelter_id"])

    assert (
        await client.delete(f"/api/v1/donations/{donation['id']}", headers=donor)
    ).status_code == 403
    assert (
        await client.delete(f"/api/v1/donations/{donation['id']}", headers=admin)
    ).status_code == 204
    assert (
        await client.get(f"/api/v1/donations/{donation['id']}", headers=admin)
    ).status_code == 404
    assert (await client.get(f"/api/v1/pets/{donation['pet_id']}")).status_code == 404


async def test_deleting_accepted_donation_keeps_listing(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    donor = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)
    donation = await _donate(client, donor, app_context["shelter_id"])

    accepted = await client.put(
        f"/api/v1/donations/{donation['id']}",
        json={
            "status": "accepted",
            "pickup_date": (datetime.now(UTC) + timedelta(days=2)).isoformat(),
        },
        headers=shelter,
    )
    assert accepted.status_code == 200

    deleted = await client.delete(f"/api/v1/donations/{donation['id']}", headers=admin)
    assert deleted.status_code == 204
    pet = await client.get(f"/api/v1/pets/{donation['pet_id']}")
    assert pet.status_code == 200
    assert pet.json()["adoption_status"] == "available"
    assert pet.json()["uploaded_by"] == app_context["shelter_id"]
