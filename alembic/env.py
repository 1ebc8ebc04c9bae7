"""Alembic environment for the content schema.

The database URL comes from ``DATABASE_URL`` (via ``Settings``) or from the
``sqlalchemy.url`` option set by ``apply_migrations``. When a caller passes a
live connection through ``config.attributes["connection"]`` migrations run on
it directly.
"""

from __future__ import annotations

import asyncio
import typing as typ
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncConnection, async_engine_from_config

from alembic import context
from sitecontent.content.storage import Base
from sitecontent.settings import DATABASE_URL_ENV, Settings

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

if config.config_file_name and config.attributes.get("connection") is None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _database_url() -> str:
    """Return the migration target, preferring the environment."""
    env_url = Settings.from_env().database_url
    if env_url:
        config.set_main_option("sqlalchemy.url", env_url.replace("%", "%%"))
        return env_url
    configured = config.get_main_option("sqlalchemy.url")
    if not configured:
        msg = f"{DATABASE_URL_ENV} is not set and sqlalchemy.url is empty."
        raise RuntimeError(msg)
    return configured


def _migrate(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit migration SQL without a database connection."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _run_with_engine() -> None:
    _database_url()
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


def run_migrations_online() -> None:
    """Run migrations on a supplied connection or a fresh async engine."""
    connection = config.attributes.get("connection")
    if connection is None:
        asyncio.run(_run_with_engine())
    elif isinstance(connection, AsyncConnection):
        asyncio.run(connection.run_sync(_migrate))
    else:
        _migrate(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
