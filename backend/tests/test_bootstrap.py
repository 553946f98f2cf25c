"""Bootstrap admin creation."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import select

from petadopt.core.config import get_settings
from petadopt.db.session import get_sessionmaker
from petadopt.models import User, UserRole
from petadopt.services.bootstrap_service import ensure_default_admin

pytestmark = pytest.mark.asyncio


async def test_bootstrap_admin_created_once(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("BOOTSTRAP_ADMIN_EMAIL", "Root@PetAdopt.com")
    monkeypatch.setenv("BOOTSTRAP_ADMIN_PASSWORD", "rootpass1")
    get_settings.cache_clear()
    try:
        assert await ensure_default_admin() is True
        assert await ensure_default_admin() is False
    finally:
        monkeypatch.delenv("BOOTSTRAP_ADMIN_EMAIL")
        monkeypatch.delenv("BOOTSTRAP_ADMIN_PASSWORD")
        get_settings.cache_clear()

    async with get_sessionmaker(app_context["db_url"])() as session:
        result = await session.execute(
            select(User).where(User.email == "root@petadopt.com")
        )
        admin = result.scalar_one()
    assert admin.role == UserRole.ADMIN


async def test_bootstrap_skipped_without_credentials(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("BOOTSTRAP_ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("BOOTSTRAP_ADMIN_PASSWORD", raising=False)
    get_settings.cache_clear()
    assert await ensure_default_admin() is False
