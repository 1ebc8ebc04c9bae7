"""Conversions between content records, domain items, and table columns.

Field names are resolved to columns here and nowhere else; ``metadata`` is
exposed as ``ContentItemRecord.metadata_`` because the declarative base
reserves the plain name.
"""

from __future__ import annotations

import typing as typ

from sitecontent.content.domain import ContentItem
from sitecontent.content.query import ContentField

from .models import ContentItemRecord

if typ.TYPE_CHECKING:
    import sqlalchemy as sa

    from sitecontent.content.query import FieldAssignments

_CONTENT_TABLE = typ.cast("sa.Table", ContentItemRecord.__table__)


def record_column(field: ContentField) -> sa.Column[typ.Any]:
    """Return the table column backing ``field``."""
    return _CONTENT_TABLE.c[field.value]


def assignment_values(
    assignments: FieldAssignments,
) -> dict[sa.Column[typ.Any], object]:
    """Translate assignments into ``UPDATE ... SET`` values."""
    return {
        record_column(assignment.field): assignment.value
        for assignment in assignments
    }


def content_item_values(item: ContentItem) -> dict[sa.Column[typ.Any], object]:
    """Return ``INSERT`` values for every column of ``item``."""
    return {record_column(field): getattr(item, field.value) for field in ContentField}


def content_item_from_record(record: ContentItemRecord) -> ContentItem:
    """Map an ORM record to a domain item."""
    return ContentItem(
        id=record.id,
        type=record.type,
        title=record.title,
        slug=record.slug,
        content=record.content,
        metadata=record.metadata_,
        status=record.status,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
