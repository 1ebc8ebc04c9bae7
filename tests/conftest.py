"""Pytest fixtures for content service and database-backed tests.

In-memory fixtures back most tests. Database fixtures start a py-pglite
Postgres, apply the Alembic migrations, and skip when py-pglite is missing.

Examples
--------
Run only the in-memory suites:

>>> SITECONTENT_TEST_DB=sqlite pytest
"""

from __future__ import annotations

import asyncio
import contextlib
import datetime as dt
import os
import typing as typ

import pytest
import pytest_asyncio
import sqlalchemy as sa
import sqlalchemy.exc as sa_exc

from sitecontent.content import ContentService
from sitecontent.content.storage import InMemoryContentRepository
from sitecontent.content.storage.alembic_helpers import apply_migrations

if typ.TYPE_CHECKING:
    from pathlib import Path

    from falcon import testing
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

try:
    from py_pglite import PGliteConfig, PGliteManager

    _PGLITE_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    _PGLITE_AVAILABLE = False

FIXED_NOW = dt.datetime(2026, 10, 19, 9, 30, tzinfo=dt.UTC)


class SteppingClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(
        self,
        start: dt.datetime = FIXED_NOW,
        step: dt.timedelta = dt.timedelta(seconds=1),
    ) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> dt.datetime:
        value = self.current
        self.current += self.step
        return value


def _pglite_disabled_reason() -> str | None:
    """Return why database fixtures cannot run, or None when they can."""
    target = os.getenv("SITECONTENT_TEST_DB", "pglite").lower()
    if target == "sqlite":
        return "SITECONTENT_TEST_DB=sqlite disables py-pglite-backed fixtures."
    if not _PGLITE_AVAILABLE:
        return "py-pglite is not installed."
    return None


async def _wait_for_engine_ready(engine: AsyncEngine) -> None:
    """Retry until py-pglite accepts SQLAlchemy connections."""
    max_attempts = 30
    delay_seconds = 0.1
    for attempt in range(1, max_attempts + 1):
        try:
            async with engine.connect() as connection:
                await connection.execute(sa.text("SELECT 1"))
        except sa_exc.OperationalError:
            if attempt == max_attempts:
                raise
            await asyncio.sleep(delay_seconds)
        else:
            return


@contextlib.asynccontextmanager
async def _pglite_engine(tmp_path: Path) -> typ.AsyncIterator[AsyncEngine]:
    """Start a py-pglite Postgres and yield an async engine bound to it."""
    from sqlalchemy.ext.asyncio import create_async_engine

    config = PGliteConfig(work_dir=tmp_path / "pglite")
    with PGliteManager(config):
        engine = create_async_engine(
            config.get_connection_string(),
            pool_pre_ping=True,
        )
        try:
            await _wait_for_engine_ready(engine)
            yield engine
        finally:
            await engine.dispose()


@pytest.fixture
def clock() -> SteppingClock:
    """Provide a deterministic clock starting at ``FIXED_NOW``."""
    return SteppingClock()


@pytest.fixture
def repository() -> InMemoryContentRepository:
    """Provide an empty in-memory repository."""
    return InMemoryContentRepository()


@pytest.fixture
def service(
    repository: InMemoryContentRepository,
    clock: SteppingClock,
) -> ContentService:
    """Provide a content service over the in-memory repository."""
    return ContentService(repository, clock=clock)


@pytest.fixture
def api_client(service: ContentService) -> testing.TestClient:
    """Build a Falcon test client around the in-memory service."""
    from falcon import testing

    from sitecontent.api import create_app

    return testing.TestClient(create_app(service))


@pytest.fixture
def _function_scoped_runner() -> typ.Iterator[asyncio.Runner]:
    """Provide a function-scoped asyncio.Runner for sync BDD steps."""
    with asyncio.Runner() as runner:
        yield runner


@pytest_asyncio.fixture
async def pglite_engine(tmp_path: Path) -> typ.AsyncIterator[AsyncEngine]:
    """Yield an async engine backed by py-pglite Postgres."""
    reason = _pglite_disabled_reason()
    if reason is not None:
        pytest.skip(reason)

    async with _pglite_engine(tmp_path) as engine:
        yield engine


@pytest_asyncio.fixture
async def migrated_engine(
    pglite_engine: AsyncEngine,
) -> typ.AsyncIterator[AsyncEngine]:
    """Yield a py-pglite engine with migrations applied."""
    await apply_migrations(pglite_engine)
    yield pglite_engine


@pytest.fixture
def session_factory(
    migrated_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Return an async session factory bound to the migrated engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        migrated_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
