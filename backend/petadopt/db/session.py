"""Async engine and session factories, one pair per database URL."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from petadopt.core.config import get_settings


@dataclass(frozen=True)
class _Database:
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]


_databases: dict[str, _Database] = {}


def _open(url: str) -> _Database:
    options: dict[str, object] = {"echo": get_settings().database_echo}
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    engine = create_async_engine(url, **options)
    return _Database(
        engine=engine,
        sessionmaker=async_sessionmaker(engine, expire_on_commit=False),
    )


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Sessionmaker for ``database_url``, defaulting to the configured database."""
    url = database_url or get_settings().database_url
    database = _databases.get(url)
    if database is None:
        database = _databases[url] = _open(url)
    return database.sessionmaker


async def get_session() -> AsyncIterator[AsyncSession]:
    async with get_sessionmaker()() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections and forget the factories for ``database_url``."""
    database = _databases.pop(database_url or get_settings().database_url, None)
    if database is not None:
        await database.engine.dispose()
