"""Ports for content persistence.

The service depends only on ``ContentRepository``; any backend that honours
these five primitives (relational table, document store, in-memory map) can
be plugged in.

Examples
--------
Implement a repository that satisfies the protocol:

>>> class DictContentRepository(ContentRepository):
...     async def get(self, item_id: str) -> ContentItem | None:
...         return self._items.get(item_id)
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .domain import ContentItem, PutOutcome
    from .query import FieldAssignments, Predicate


class ContentRepository(typ.Protocol):
    """Key-value persistence interface for content items.

    Implementations raise ``StorageError`` for backend failures. Absence is
    reported as ``None``, never as an exception.

    Methods
    -------
    put_if_absent(item)
        Store an item unless its identifier already exists.
    get(item_id)
        Fetch an item by identifier.
    scan(predicate)
        List items matching a conjunction of equality tests.
    update(item_id, assignments)
        Apply field assignments to an existing item.
    delete(item_id)
        Remove an item and return its prior value.
    """

    async def put_if_absent(self, item: ContentItem) -> PutOutcome:
        """Store ``item`` if no item with the same identifier exists.

        Parameters
        ----------
        item : ContentItem
            Fully stamped item to persist.

        Returns
        -------
        PutOutcome
            ``CREATED`` when stored, ``ALREADY_EXISTS`` when the key is taken.
        """
        ...

    async def get(self, item_id: str) -> ContentItem | None:
        """Fetch a content item by identifier.

        Parameters
        ----------
        item_id : str
            Identifier of the item.

        Returns
        -------
        ContentItem | None
            The stored item, or ``None`` if no match exists.
        """
        ...

    async def scan(self, predicate: Predicate) -> list[ContentItem]:
        """List content items matching ``predicate``.

        Parameters
        ----------
        predicate : Predicate
            Conjunction of equality tests; empty matches every item.

        Returns
        -------
        list[ContentItem]
            Matching items in repository-defined order.
        """
        ...

    async def update(
        self,
        item_id: str,
        assignments: FieldAssignments,
    ) -> ContentItem | None:
        """Apply ``assignments`` to an existing item.

        Parameters
        ----------
        item_id : str
            Identifier of the item to update.
        assignments : FieldAssignments
            Field values to overwrite.

        Returns
        -------
        ContentItem | None
            The updated item, or ``None`` if no match exists.
        """
        ...

    async def delete(self, item_id: str) -> ContentItem | None:
        """Remove an item unconditionally.

        Parameters
        ----------
        item_id : str
            Identifier of the item to remove.

        Returns
        -------
        ContentItem | None
            The removed item, or ``None`` if no match existed.
        """
        ...
