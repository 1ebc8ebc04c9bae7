"""In-memory content repository.

Items are kept in insertion order, which is also the scan order. Each
operation completes without awaiting, so operations are atomic with respect
to other coroutines on the same event loop. Stored and returned items never
share their ``content`` or ``metadata`` payloads with callers.
"""

from __future__ import annotations

import copy
import dataclasses as dc
import typing as typ

from sitecontent.content.domain import PutOutcome
from sitecontent.content.ports import ContentRepository

if typ.TYPE_CHECKING:
    from sitecontent.content.domain import ContentItem
    from sitecontent.content.query import FieldAssignments, Predicate


def _detached(item: ContentItem) -> ContentItem:
    """Return a copy of ``item`` with its JSON payloads deep-copied."""
    return dc.replace(
        item,
        content=copy.deepcopy(item.content),
        metadata=copy.deepcopy(item.metadata),
    )


class InMemoryContentRepository(ContentRepository):
    """Dictionary-backed ``ContentRepository`` for tests and local tooling."""

    def __init__(self, items: typ.Iterable[ContentItem] = ()) -> None:
        self._items: dict[str, ContentItem] = {
            item.id: _detached(item) for item in items
        }

    def __len__(self) -> int:
        return len(self._items)

    async def put_if_absent(self, item: ContentItem) -> PutOutcome:
        """Store ``item`` unless its identifier is taken."""
        if item.id in self._items:
            return PutOutcome.ALREADY_EXISTS
        self._items[item.id] = _detached(item)
        return PutOutcome.CREATED

    async def get(self, item_id: str) -> ContentItem | None:
        """Fetch an item by identifier."""
        item = self._items.get(item_id)
        return None if item is None else _detached(item)

    async def scan(self, predicate: Predicate) -> list[ContentItem]:
        """List items matching ``predicate`` in insertion order."""
        return [
            _detached(item) for item in self._items.values() if predicate.matches(item)
        ]

    async def update(
        self,
        item_id: str,
        assignments: FieldAssignments,
    ) -> ContentItem | None:
        """Replace the stored item with ``assignments`` applied."""
        existing = self._items.get(item_id)
        if existing is None:
            return None
        updated = _detached(assignments.apply(existing))
        self._items[item_id] = updated
        return _detached(updated)

    async def delete(self, item_id: str) -> ContentItem | None:
        """Remove an item and return it."""
        return self._items.pop(item_id, None)
