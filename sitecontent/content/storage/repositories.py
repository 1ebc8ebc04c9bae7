"""SQLAlchemy repository for content items.

Each repository call runs in its own session and transaction drawn from the
supplied session factory; no cross-call transaction is held. Driver and
transport failures surface as ``StorageError``.

Examples
--------
>>> repository = SqlAlchemyContentRepository(session_factory)
>>> service = ContentService(repository)
"""

from __future__ import annotations

import contextlib
import typing as typ

import sqlalchemy as sa
from sqlalchemy import exc as sa_exc
from sqlalchemy.dialects import postgresql

from sitecontent.content.domain import PutOutcome
from sitecontent.content.errors import StorageError
from sitecontent.content.ports import ContentRepository
from sitecontent.logging import get_logger, log_error

from .mappers import (
    assignment_values,
    content_item_from_record,
    content_item_values,
    record_column,
)
from .models import ContentItemRecord

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sqlalchemy.ext.asyncio import AsyncSession

    from sitecontent.content.domain import ContentItem
    from sitecontent.content.query import FieldAssignments, Predicate

logger = get_logger(__name__)


def _where_clause(predicate: Predicate) -> sa.ColumnElement[bool]:
    """Translate an equality predicate into a SQL conjunction."""
    return sa.and_(
        sa.true(),
        *(record_column(term.field) == term.value for term in predicate.terms),
    )


class SqlAlchemyContentRepository(ContentRepository):
    """Persist content items in the ``content_items`` table.

    Parameters
    ----------
    session_factory : collections.abc.Callable[[], AsyncSession]
        Factory producing async sessions, typically an ``async_sessionmaker``.
    """

    def __init__(self, session_factory: cabc.Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory

    @contextlib.asynccontextmanager
    async def _transaction(
        self,
        action: str,
        item_id: str | None = None,
    ) -> typ.AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction, translating backend errors."""
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except (sa_exc.SQLAlchemyError, TimeoutError) as exc:
            log_error(
                logger,
                "Content storage failed during %s (item %s).",
                action,
                item_id,
                exc_info=exc,
            )
            msg = f"Content storage failed during {action}."
            raise StorageError(msg, item_id=item_id) from exc

    async def put_if_absent(self, item: ContentItem) -> PutOutcome:
        """Insert ``item`` unless a row with the same id exists."""
        statement = (
            postgresql
            .insert(ContentItemRecord)
            .values(content_item_values(item))
            .on_conflict_do_nothing(index_elements=[ContentItemRecord.id])
            .returning(ContentItemRecord.id)
        )
        async with self._transaction("put_if_absent", item.id) as session:
            inserted_id = (await session.execute(statement)).scalar_one_or_none()
        return PutOutcome.ALREADY_EXISTS if inserted_id is None else PutOutcome.CREATED

    async def get(self, item_id: str) -> ContentItem | None:
        """Fetch a content item by identifier."""
        async with self._transaction("get", item_id) as session:
            record = await session.get(ContentItemRecord, item_id)
            return None if record is None else content_item_from_record(record)

    async def scan(self, predicate: Predicate) -> list[ContentItem]:
        """List items matching ``predicate``, oldest first."""
        statement = (
            sa
            .select(ContentItemRecord)
            .where(_where_clause(predicate))
            .order_by(ContentItemRecord.created_at, ContentItemRecord.id)
        )
        async with self._transaction("scan") as session:
            result = await session.execute(statement)
            return [content_item_from_record(record) for record in result.scalars()]

    async def update(
        self,
        item_id: str,
        assignments: FieldAssignments,
    ) -> ContentItem | None:
        """Apply ``assignments`` and return the updated item."""
        if not assignments:
            return await self.get(item_id)
        statement = (
            sa
            .update(ContentItemRecord)
            .where(ContentItemRecord.id == item_id)
            .values(assignment_values(assignments))
            .returning(ContentItemRecord)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("update", item_id) as session:
            record = (await session.execute(statement)).scalar_one_or_none()
            return None if record is None else content_item_from_record(record)

    async def delete(self, item_id: str) -> ContentItem | None:
        """Delete an item and return its prior value."""
        statement = (
            sa
            .delete(ContentItemRecord)
            .where(ContentItemRecord.id == item_id)
            .returning(ContentItemRecord)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("delete", item_id) as session:
            record = (await session.execute(statement)).scalar_one_or_none()
            return None if record is None else content_item_from_record(record)
