"""Document metadata tests."""

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


def _document(pet_id: int | None, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "pet_id": pet_id,
        "file_name": "rabies.pdf",
        "file_path": "documents/rabies.pdf",
        "file_size": 4096,
        "mime_type": "application/pdf",
        "document_type": "vaccination_record",
    }
    payload.update(overrides)
    return payload


async def test_upload_view_and_verify(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    adopter = await _authenticate(client, app_context["user_email"], password)
    stranger = await _authenticate(client, app_context["user2_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)
    admin = await _authenticate(client, app_context["admin_email"], password)

    created = await client.post(
        "/api/v1/documents", json=_document(available_pet), headers=adopter
    )
    assert created.status_code == 201
    document = created.json()
    assert document["user_id"] == app_context["user_id"]
    assert document["is_verified"] is False

    assert (
        await client.get(f"/api/v1/documents/{document['id']}", headers=shelter)
    ).status_code == 200
    assert (
        await client.get(f"/api/v1/documents/{document['id']}", headers=stranger)
    ).status_code == 403

    for_pet = await client.get(f"/api/v1/documents/pet/{available_pet}", headers=shelter)
    assert [item["id"] for item in for_pet.json()] == [document["id"]]
    hidden = await client.get(f"/api/v1/documents/pet/{available_pet}", headers=stranger)
    assert hidden.json() == []

    mine = await client.get(
        f"/api/v1/documents/user/{app_context['user_id']}", headers=adopter
    )
    assert len(mine.json()) == 1
    assert (
        await client.get(f"/api/v1/documents/user/{app_context['user_id']}", headers=stranger)
    ).status_code == 403

    denied = await client.put(
        f"/api/v1/documents/{document['id']}/verify",
        json={"is_verified": True},
        headers=shelter,
    )
    assert denied.status_code == 403

    verified = await client.put(
        f"/api/v1/documents/{document['id']}/verify",
        json={"is_verified": True, "verification_notes": "Matches vet records"},
        headers=admin,
    )
    assert verified.status_code == 200
    body = verified.json()
    assert body["is_verified"] is True
    assert body["verified_by"] == app_context["admin_id"]
    assert body["verified_at"] is not None

    unverified = await client.get(
        "/api/v1/documents", params={"is_verified": False}, headers=admin
    )
    assert unverified.json() == []
    assert (await client.get("/api/v1/documents", headers=shelter)).status_code == 403


async def test_only_uploader_or_admin_deletes(
    app_context: dict[str, Any], available_pet: int
) -> None:
    client: AsyncClient = app_context["client"]
    password = app_context["password"]
    adopter = await _authenticate(client, app_context["user_email"], password)
    shelter = await _authenticate(client, app_context["shelter_email"], password)

    document = (
        await client.post("/api/v1/documents", json=_document(None), headers=adopter)
    ).json()

    assert (
        await client.delete(f"/api/v1/documents/{document['id']}", headers=shelter)
    ).status_code == 403
    assert (
        await client.delete(f"/api/v1/documents/{document['id']}", headers=adopter)
    ).status_code == 204
    assert (
        await client.get(f"/api/v1/documents/{document['id']}", headers=adopter)
    ).status_code == 404


async def test_upload_validation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    adopter = await _authenticate(client, app_context["user_email"], app_context["password"])

    too_large = await client.post(
        "/api/v1/documents",
        json=_document(None, file_size=11 * 1024 * 1024),
        headers=adopter,
    )
    assert too_large.status_code == 422

    missing_pet = await client.post(
        "/api/v1/documents", json=_document(9999), headers=adopter
    )
    assert missing_pet.status_code == 404
