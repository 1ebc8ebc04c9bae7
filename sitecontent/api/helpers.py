"""Request parsing helpers for content API resources.

Examples
--------
>>> payload = require_payload_dict(await req.get_media())
>>> item = require_found(await service.get_by_id(item_id), item_id)
"""

from __future__ import annotations

import typing as typ

from sitecontent.content import FieldIssue, NotFoundError, ValidationError

if typ.TYPE_CHECKING:
    import falcon

    from sitecontent.content import ContentItem

    from .types import JsonPayload


def require_payload_dict(payload: object) -> JsonPayload:
    """Validate that request media is a JSON object.

    Raises
    ------
    ValidationError
        If the payload is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise ValidationError([FieldIssue("$", "JSON object payload is required.")])
    return typ.cast("JsonPayload", payload)


def require_items_list(payload: JsonPayload) -> list[object]:
    """Return the ``items`` array of a bulk request.

    Raises
    ------
    ValidationError
        If ``items`` is missing or not an array.
    """
    items = payload.get("items")
    if not isinstance(items, list):
        raise ValidationError([FieldIssue("items", "Items must be an array.")])
    return typ.cast("list[object]", items)


def optional_param(req: falcon.Request, name: str) -> str | None:
    """Return a query parameter, treating blank values as absent."""
    value = req.get_param(name)
    return value if value else None


def require_found(item: ContentItem | None, item_id: str) -> ContentItem:
    """Return ``item`` or raise ``NotFoundError`` for ``item_id``."""
    if item is None:
        msg = f"Content item {item_id} not found."
        raise NotFoundError(msg, item_id=item_id)
    return item
