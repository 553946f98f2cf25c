"""Run migrations against the configured database on a synchronous driver."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import URL, make_url

from petadopt.core.config import get_settings
from petadopt.db.base import Base
import petadopt.models  # noqa: F401

_SYNC_DRIVERS = {
    "postgresql": "postgresql+psycopg",
    "postgresql+asyncpg": "postgresql+psycopg",
    "sqlite+aiosqlite": "sqlite",
}

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url() -> URL:
    settings = get_settings()
    url = make_url(settings.sync_database_url or settings.database_url)
    return url.set(drivername=_SYNC_DRIVERS.get(url.drivername, url.drivername))


def _configure(**options) -> None:
    url = _sync_url()
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=url.get_backend_name() == "sqlite",
        compare_type=True,
        **options,
    )


def run_migrations_offline() -> None:
    _configure(
        url=_sync_url().render_as_string(hide_password=False),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _sync_url().render_as_string(hide_password=False)
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
