"""Dashboard read-model tests."""

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


async def test_empty_dashboard_is_zero_filled(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _authenticate(client, app_context["user_email"], app_context["password"])

    summary = await client.get("/api/v1/dashboard/summary", headers=headers)
    assert summary.status_code == 200
    body = summary.json()
    assert body["role"] == "user"
    assert body["adoptions"] == {
        "pending": 0,
        "approved": 0,
        "rejected": 0,
        "completed": 0,
        "total": 0,
        "this_month": 0,
    }
    assert body["donations"]["total"] == 0
    assert body["pets"] is None
    assert body["users"] is None
    assert body["favorites"] == 0

    notes = await client.get("/api/v1/dashboard/notifications", headers=headers)
    assert notes.json() == {
        "pending_adoptions": 0,
        "pending_donations": 0,
        "unverified_documents": 0,
    }


async def test_counts_are_scoped_by_role(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    adopter = await _authenticate(client, app_context["user_email"], password)
    stranger = await _authenticate(client, app_context["user2_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    other_shelter = await _authenticate(client, app_context["shelter2_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)

    await client.post(
        "/api/v1/adoptions",
        json={"pet_id": available_pet, "application_message": "Hi"},
        headers=adopter,
    )
    await client.post(f"/api/v1/favorites/{available_pet}", headers=adopter)
    await client.post(
        "/api/v1/documents",
        json={
            "pet_id": available_pet,
            "file_name": "vet.pdf",
            "file_path": "documents/vet.pdf",
            "file_size": 2048,
            "mime_type": "application/pdf",
            "document_type": "medical_history",
        },
        headers=shelter,
    )

    mine = (await client.get("/api/v1/dashboard/summary", headers=adopter)).json()
    assert mine["adoptions"]["pending"] == 1
    assert mine["adoptions"]["this_month"] == 1
    assert mine["favorites"] == 1

    theirs = (await client.get("/api/v1/dashboard/summary", headers=stranger)).json()
    assert theirs["adoptions"]["total"] == 0

    owning = (await client.get("/api/v1/dashboard/summary", headers=shelter)).json()
    assert owning["adoptions"]["pending"] == 1
    assert owning["pets"]["pending"] == 1
    assert owning["users"] is None

    other = (await client.get("/api/v1/dashboard/summary", headers=other_shelter)).json()
    assert other["adoptions"]["total"] == 0
    assert other["pets"]["total"] == 0

    overall = (await client.get("/api/v1/dashboard/summary", headers=admin)).json()
    assert overall["adoptions"]["total"] == 1
    assert overall["pets"]["total"] == 1
    assert overall["users"]["total_users"] == 5
    assert overall["users"]["active_shelters"] == 2

    shelter_notes = (
        await client.get("/api/v1/dashboard/notifications", headers=shelter)
    ).json()
    assert shelter_notes["pending_adoptions"] == 1
    assert shelter_notes["unverified_documents"] == 0

    admin_notes = (await client.get("/api/v1/dashboard/notifications", headers=admin)).json()
    assert admin_notes["pending_adoptions"] == 1
    assert admin_notes["unverified_documents"] == 1


async def test_stats_endpoints_are_admin_only(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)

    for path in (
        "/api/v1/adoptions/stats/overview",
        "/api/v1/donations/stats/overview",
        "/api/v1/users/stats/overview",
    ):
        assert (await client.get(path, headers=shelter)).status_code == 403
        response = await client.get(path, headers=admin)
        assert response.status_code == 200

    donations = (
        await client.get("/api/v1/donations/stats/overview", headers=admin)
    ).json()
    assert donations == {
        "pending": 0,
        "accepted": 0,
        "rejected": 0,
        "completed": 0,
        "total": 0,
        "this_month": 0,
    }
