"""Content service: identity, timestamps, queries, and bulk ingestion.

The service is constructed once with a repository and passed to adapters
(HTTP façade, seed CLI). It keeps no state of its own beyond the identifier
factory.

Examples
--------
Create and fetch a page:

>>> service = ContentService(InMemoryContentRepository())
>>> page = await service.create(
...     {"type": "page", "title": "Home", "slug": "home", "content": {}}
... )
>>> await service.get_by_slug("home", "page")
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import typing as typ

from sitecontent.logging import get_logger, log_info, log_warning

from .domain import ContentDraft, ContentItem, PutOutcome
from .errors import ContentError, DuplicateKeyError
from .identity import ContentIdFactory
from .query import ContentField, FieldAssignments, Predicate
from .schema import (
    ContentChanges,
    coerce_content_status,
    coerce_content_type,
    validate_create_input,
    validate_update_input,
)

if typ.TYPE_CHECKING:
    from .domain import ContentStatus, ContentType
    from .ports import ContentRepository

logger = get_logger(__name__)

_TIMESTAMP_STEP = dt.timedelta(microseconds=1)


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def _as_aware(value: dt.datetime) -> dt.datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=dt.UTC)


def _describe_payload(index: int, payload: object) -> str:
    """Return a short label for a bulk input used in log lines."""
    if isinstance(payload, cabc.Mapping) and "slug" in payload:
        return f"#{index} (slug {payload['slug']!r})"
    if isinstance(payload, ContentDraft):
        return f"#{index} (slug {payload.slug!r})"
    return f"#{index}"


@dc.dataclass(frozen=True, slots=True)
class BulkCreateOutcome:
    """Result of creating one bulk input.

    Attributes
    ----------
    payload : object
        The input exactly as supplied.
    item : ContentItem | None
        The created item, when creation succeeded.
    error : ContentError | None
        The failure, when creation was skipped.
    """

    payload: object
    item: ContentItem | None = None
    error: ContentError | None = None

    @property
    def succeeded(self) -> bool:
        """Return True when the item was created."""
        return self.item is not None


@dc.dataclass(frozen=True, slots=True)
class BulkCreateReport:
    """Per-input outcomes of a bulk create, in input order."""

    outcomes: tuple[BulkCreateOutcome, ...]

    @property
    def created(self) -> list[ContentItem]:
        """Return the successfully created items in input order."""
        return [outcome.item for outcome in self.outcomes if outcome.item is not None]

    @property
    def failures(self) -> list[BulkCreateOutcome]:
        """Return the outcomes of skipped inputs."""
        return [outcome for outcome in self.outcomes if not outcome.succeeded]


class ContentService:
    """Coordinate content persistence through a ``ContentRepository``.

    Parameters
    ----------
    repository : ContentRepository
        Storage backend for content items.
    id_factory : collections.abc.Callable[[ContentType, str], str], optional
        Identifier builder; defaults to ``ContentIdFactory`` sharing ``clock``.
    clock : collections.abc.Callable[[], dt.datetime], optional
        Source of timestamps; defaults to UTC wall-clock time.
    """

    def __init__(
        self,
        repository: ContentRepository,
        *,
        id_factory: cabc.Callable[[ContentType, str], str] | None = None,
        clock: cabc.Callable[[], dt.datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or _utc_now
        self._id_factory = id_factory or ContentIdFactory(self._clock)

    async def create(self, payload: object) -> ContentItem:
        """Validate and persist a new content item.

        Parameters
        ----------
        payload : object
            Create payload (decoded JSON object) or a validated ``ContentDraft``.

        Returns
        -------
        ContentItem
            The persisted item with ``id``, ``created_at`` and ``updated_at``.

        Raises
        ------
        ValidationError
            If the payload does not match the create schema.
        DuplicateKeyError
            If the generated identifier already exists.
        StorageError
            If the repository fails.
        """
        draft = (
            payload
            if isinstance(payload, ContentDraft)
            else validate_create_input(payload)
        )
        now = self._clock()
        item = ContentItem(
            id=self._id_factory(draft.type, draft.slug),
            type=draft.type,
            title=draft.title,
            slug=draft.slug,
            content=draft.content,
            metadata=draft.metadata,
            status=draft.status,
            created_at=now,
            updated_at=now,
        )
        outcome = await self._repository.put_if_absent(item)
        if outcome is PutOutcome.ALREADY_EXISTS:
            msg = f"Content item {item.id} already exists."
            raise DuplicateKeyError(msg, item_id=item.id)
        log_info(logger, "Created content item %s.", item.id)
        return item

    async def get_by_id(self, item_id: str) -> ContentItem | None:
        """Return the item stored under ``item_id``, or None."""
        return await self._repository.get(item_id)

    async def get_by_slug(
        self,
        slug: str,
        content_type: str | ContentType | None = None,
    ) -> ContentItem | None:
        """Return the first item with ``slug`` (and ``content_type``), or None.

        Slugs are not unique; when several items match, the first one in the
        repository's scan order wins.

        Raises
        ------
        ValidationError
            If ``content_type`` is not a known content type.
        """
        predicate = Predicate.from_optional({
            ContentField.SLUG: slug,
            ContentField.TYPE: coerce_content_type(content_type),
        })
        matches = await self._repository.scan(predicate)
        return matches[0] if matches else None

    async def list_items(
        self,
        content_type: str | ContentType | None = None,
        status: str | ContentStatus | None = None,
    ) -> list[ContentItem]:
        """Return every item matching the supplied filters.

        Raises
        ------
        ValidationError
            If a filter value is outside its enumeration.
        """
        predicate = Predicate.from_optional({
            ContentField.TYPE: coerce_content_type(content_type),
            ContentField.STATUS: coerce_content_status(status),
        })
        return await self._repository.scan(predicate)

    def _next_updated_at(self, previous: dt.datetime) -> dt.datetime:
        """Return a timestamp strictly after ``previous``."""
        return max(self._clock(), _as_aware(previous) + _TIMESTAMP_STEP)

    async def update(self, item_id: str, payload: object) -> ContentItem | None:
        """Merge supplied fields into an existing item.

        An empty payload still writes, refreshing only ``updated_at``.

        Parameters
        ----------
        item_id : str
            Identifier of the item to update.
        payload : object
            Partial update payload or validated ``ContentChanges``.

        Returns
        -------
        ContentItem | None
            The updated item, or ``None`` if ``item_id`` does not exist.

        Raises
        ------
        ValidationError
            If the payload does not match the update schema.
        StorageError
            If the repository fails.
        """
        changes = (
            payload
            if isinstance(payload, ContentChanges)
            else validate_update_input(payload)
        )
        existing = await self._repository.get(item_id)
        if existing is None:
            return None

        assignments = FieldAssignments.of(changes.fields).with_value(
            ContentField.UPDATED_AT,
            self._next_updated_at(existing.updated_at),
        )
        updated = await self._repository.update(item_id, assignments)
        if updated is not None:
            log_info(
                logger,
                "Updated content item %s (%s fields).",
                item_id,
                len(changes.fields),
            )
        return updated

    async def delete(self, item_id: str) -> ContentItem | None:
        """Delete ``item_id`` and return the removed item, or None if absent."""
        removed = await self._repository.delete(item_id)
        if removed is not None:
            log_info(logger, "Deleted content item %s.", item_id)
        return removed

    async def bulk_create(self, payloads: cabc.Iterable[object]) -> BulkCreateReport:
        """Create items one after another, skipping failures.

        Each input is created only after the previous one finished. A failing
        input is logged and recorded in the report; it never aborts the batch.

        Parameters
        ----------
        payloads : collections.abc.Iterable[object]
            Create payloads in the order they should be written.

        Returns
        -------
        BulkCreateReport
            One outcome per input, in input order.
        """
        outcomes: list[BulkCreateOutcome] = []
        for index, payload in enumerate(payloads):
            try:
                item = await self.create(payload)
            except ContentError as exc:
                log_warning(
                    logger,
                    "Skipped bulk content item %s: %s",
                    _describe_payload(index, payload),
                    exc,
                )
                outcomes.append(BulkCreateOutcome(payload=payload, error=exc))
            else:
                outcomes.append(BulkCreateOutcome(payload=payload, item=item))

        report = BulkCreateReport(outcomes=tuple(outcomes))
        log_info(
            logger,
            "Bulk created %s of %s content items.",
            len(report.created),
            len(outcomes),
        )
        return report
