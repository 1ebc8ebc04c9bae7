"""Boundary validation for content payloads.

Payloads arrive as decoded JSON objects using the wire field names
(``createdAt``/``updatedAt``). Validators collect every offending field before
raising ``ValidationError`` and return typed values for the service layer.

Examples
--------
>>> draft = validate_create_input(
...     {"type": "page", "title": "Home", "slug": "home", "content": {}}
... )
>>> draft.status
<ContentStatus.DRAFT: 'draft'>
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import datetime as dt
import typing as typ

from .domain import ContentDraft, ContentItem, ContentStatus, ContentType
from .errors import FieldIssue, ValidationError
from .query import ContentField

EnumT = typ.TypeVar("EnumT", ContentType, ContentStatus)

if typ.TYPE_CHECKING:
    from .domain import JsonMapping

_SERVER_ASSIGNED_KEYS: tuple[str, ...] = ("id", "createdAt", "updatedAt")
_IMMUTABLE_KEYS: tuple[str, ...] = ("id", "createdAt")


def _is_non_empty_string(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_string_keyed_mapping(value: object) -> bool:
    return isinstance(value, cabc.Mapping) and all(
        isinstance(candidate_key, str) for candidate_key in value
    )


def _allowed(enum_type: type[ContentType] | type[ContentStatus]) -> str:
    return ", ".join(repr(member.value) for member in enum_type)


@dc.dataclass(frozen=True, slots=True)
class ContentChanges:
    """Validated partial update; only supplied fields are present.

    Attributes
    ----------
    fields : dict[ContentField, object]
        Supplied values keyed by content field.
    """

    fields: dict[ContentField, object] = dc.field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Return True when no mutable field was supplied."""
        return not self.fields


class _IssueCollector:
    """Accumulate field issues while parsing one payload."""

    def __init__(self, payload: cabc.Mapping[str, object]) -> None:
        self._payload = payload
        self.issues: list[FieldIssue] = []

    def add(self, field: str, message: str) -> None:
        self.issues.append(FieldIssue(field=field, message=message))

    def raise_if_any(self) -> None:
        if self.issues:
            raise ValidationError(self.issues)

    def enum_value(
        self,
        key: str,
        enum_type: type[EnumT],
    ) -> EnumT | None:
        raw = self._payload[key]
        try:
            return enum_type(typ.cast("str", raw))
        except ValueError:
            self.add(key, f"must be one of {_allowed(enum_type)}, got {raw!r}.")
            return None

    def text(self, key: str) -> str | None:
        raw = self._payload[key]
        if not _is_non_empty_string(raw):
            self.add(key, "must be a non-empty string.")
            return None
        return typ.cast("str", raw)

    def metadata(self, key: str) -> JsonMapping | None:
        raw = self._payload[key]
        if raw is None:
            return None
        if not _is_string_keyed_mapping(raw):
            self.add(key, "must be an object with string keys.")
            return None
        return dict(copy.deepcopy(typ.cast("cabc.Mapping[str, object]", raw)))

    def timestamp(self, key: str) -> dt.datetime | None:
        raw = self._payload[key]
        if not isinstance(raw, str):
            self.add(key, "must be an ISO-8601 timestamp string.")
            return None
        try:
            return dt.datetime.fromisoformat(raw)
        except ValueError:
            self.add(key, f"must be an ISO-8601 timestamp string, got {raw!r}.")
            return None


def _require_mapping(payload: object) -> cabc.Mapping[str, object]:
    if not _is_string_keyed_mapping(payload):
        raise ValidationError([FieldIssue("$", "must be a JSON object.")])
    return typ.cast("cabc.Mapping[str, object]", payload)


def _require_keys(
    collector: _IssueCollector,
    payload: cabc.Mapping[str, object],
    keys: cabc.Iterable[str],
) -> None:
    for key in keys:
        if key not in payload:
            collector.add(key, "is required.")


def validate_create_input(payload: object) -> ContentDraft:
    """Validate a create payload and return a draft.

    Server-assigned keys (``id``, ``createdAt``, ``updatedAt``) and unknown
    keys are stripped. ``status`` defaults to ``draft``.

    Parameters
    ----------
    payload : object
        Decoded JSON object supplied by the caller.

    Returns
    -------
    ContentDraft
        Typed create input with ``content`` and ``metadata`` deep-copied.

    Raises
    ------
    ValidationError
        If any field is missing or malformed; every issue is reported.
    """
    data = _require_mapping(payload)
    collector = _IssueCollector(data)
    _require_keys(collector, data, ("type", "title", "slug", "content"))

    content_type = collector.enum_value("type", ContentType) if "type" in data else None
    title = collector.text("title") if "title" in data else None
    slug = collector.text("slug") if "slug" in data else None
    metadata = collector.metadata("metadata") if "metadata" in data else None
    status = (
        collector.enum_value("status", ContentStatus)
        if "status" in data
        else ContentStatus.DRAFT
    )
    collector.raise_if_any()

    return ContentDraft(
        type=typ.cast("ContentType", content_type),
        title=typ.cast("str", title),
        slug=typ.cast("str", slug),
        content=copy.deepcopy(data["content"]),
        metadata=metadata,
        status=typ.cast("ContentStatus", status),
    )


def validate_update_input(payload: object) -> ContentChanges:
    """Validate a partial update payload.

    ``id`` and ``createdAt`` are rejected; ``updatedAt`` is accepted but
    discarded because the service always stamps it.

    Raises
    ------
    ValidationError
        If an immutable field is present or a supplied field is malformed.
    """
    data = _require_mapping(payload)
    collector = _IssueCollector(data)
    for key in _IMMUTABLE_KEYS:
        if key in data:
            collector.add(key, "cannot be changed after creation.")

    fields: dict[ContentField, object] = {}
    if "type" in data:
        fields[ContentField.TYPE] = collector.enum_value("type", ContentType)
    if "title" in data:
        fields[ContentField.TITLE] = collector.text("title")
    if "slug" in data:
        fields[ContentField.SLUG] = collector.text("slug")
    if "content" in data:
        fields[ContentField.CONTENT] = copy.deepcopy(data["content"])
    if "metadata" in data:
        fields[ContentField.METADATA] = collector.metadata("metadata")
    if "status" in data:
        fields[ContentField.STATUS] = collector.enum_value("status", ContentStatus)
    collector.raise_if_any()
    return ContentChanges(fields=fields)


def validate_record(payload: object) -> ContentItem:
    """Validate a complete stored record, for example from a seed export.

    ``createdAt`` and ``updatedAt`` are optional; when absent they default to
    the current time.

    Raises
    ------
    ValidationError
        If any field is missing or malformed; every issue is reported.
    """
    data = _require_mapping(payload)
    collector = _IssueCollector(data)
    _require_keys(collector, data, ("id",))
    item_id = collector.text("id") if "id" in data else None
    created_at = collector.timestamp("createdAt") if "createdAt" in data else None
    updated_at = collector.timestamp("updatedAt") if "updatedAt" in data else None

    draft_payload = {
        key: value for key, value in data.items() if key not in _SERVER_ASSIGNED_KEYS
    }
    try:
        draft = validate_create_input(draft_payload)
    except ValidationError as exc:
        collector.issues.extend(exc.issues)
    collector.raise_if_any()

    now = dt.datetime.now(dt.UTC)
    return ContentItem(
        id=typ.cast("str", item_id),
        type=draft.type,
        title=draft.title,
        slug=draft.slug,
        content=draft.content,
        metadata=draft.metadata,
        status=draft.status,
        created_at=created_at or now,
        updated_at=updated_at or created_at or now,
    )


def coerce_content_type(value: str | ContentType | None) -> ContentType | None:
    """Validate an optional ``type`` filter value."""
    if value is None or isinstance(value, ContentType):
        return value
    try:
        return ContentType(value)
    except ValueError as exc:
        issue = FieldIssue("type", f"must be one of {_allowed(ContentType)}.")
        raise ValidationError([issue]) from exc


def coerce_content_status(value: str | ContentStatus | None) -> ContentStatus | None:
    """Validate an optional ``status`` filter value."""
    if value is None or isinstance(value, ContentStatus):
        return value
    try:
        return ContentStatus(value)
    except ValueError as exc:
        issue = FieldIssue("status", f"must be one of {_allowed(ContentStatus)}.")
        raise ValidationError([issue]) from exc


__all__ = (
    "ContentChanges",
    "coerce_content_status",
    "coerce_content_type",
    "validate_create_input",
    "validate_record",
    "validate_update_input",
)
