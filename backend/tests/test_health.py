"""Health endpoint and middleware smoke tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_healthcheck_reports_database(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "PetAdopt API"
    assert payload["database"] == "ok"
    assert "x-request-id" in response.headers


async def test_root_sets_security_headers(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "PetAdopt API"}
    assert response.headers.get("x-content-type-options") == "nosniff"
