"""Alembic configuration and migration helpers for the content schema.

Test fixtures and deployment tooling call ``apply_migrations`` to bring an
async engine's database up to the latest content schema.

Examples
--------
>>> await apply_migrations(engine)
"""

import pathlib
import typing as typ

from alembic.config import Config

from alembic import command

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.ext.asyncio import AsyncEngine

_PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[3]


def alembic_config(database_url: str) -> Config:
    """Build an Alembic configuration for ``database_url``.

    Percent characters in the URL are escaped for ConfigParser.
    """
    cfg = Config(str(_PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(_PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def _upgrade_to_head(connection: Connection, cfg: Config) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def apply_migrations(engine: AsyncEngine) -> None:
    """Upgrade the database behind ``engine`` to the latest revision."""
    cfg = alembic_config(engine.url.render_as_string(hide_password=False))
    async with engine.begin() as connection:
        await connection.run_sync(_upgrade_to_head, cfg)
