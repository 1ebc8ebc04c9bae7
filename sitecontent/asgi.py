"""Runtime composition: settings, engine, repository, service, and app.

Serve the API with any ASGI server, for example::

    DATABASE_URL=postgresql+psycopg://localhost/site \
        uvicorn --factory sitecontent.asgi:create_runtime_app
"""

from __future__ import annotations

import typing as typ

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sitecontent.api import create_app
from sitecontent.content import ContentService
from sitecontent.content.storage import SqlAlchemyContentRepository
from sitecontent.logging import configure_logging, get_logger, log_info, log_warning
from sitecontent.settings import LOG_LEVEL_ENV, Settings

if typ.TYPE_CHECKING:
    from falcon import asgi
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = get_logger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Raises
    ------
    SettingsError
        If ``DATABASE_URL`` is not configured.
    """
    return create_async_engine(settings.require_database_url(), pool_pre_ping=True)


def build_service(engine: AsyncEngine) -> ContentService:
    """Build a ``ContentService`` backed by ``engine``."""
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return ContentService(SqlAlchemyContentRepository(session_factory))


def configure_runtime_logging(settings: Settings) -> None:
    """Apply the configured log level, warning when it was not recognised."""
    level, used_default = configure_logging(settings.log_level)
    if used_default and settings.log_level:
        log_warning(
            logger,
            "Unrecognised %s=%r; using %s.",
            LOG_LEVEL_ENV,
            settings.log_level,
            level,
        )


def create_runtime_app(settings: Settings | None = None) -> asgi.App:
    """Compose the production ASGI application from ``settings``."""
    resolved = settings or Settings.from_env()
    configure_runtime_logging(resolved)
    app = create_app(build_service(create_engine(resolved)))
    log_info(logger, "Content API ready.")
    return app


__all__ = [
    "build_service",
    "configure_runtime_logging",
    "create_engine",
    "create_runtime_app",
]
