"""Tests for typed predicates and field assignments."""

from __future__ import annotations

import datetime as dt

import pytest

from sitecontent.content import (
    ContentField,
    ContentItem,
    ContentStatus,
    ContentType,
    FieldAssignment,
    FieldAssignments,
    FieldEquals,
    Predicate,
)

_NOW = dt.datetime(2026, 10, 19, tzinfo=dt.UTC)


def _item(**overrides: object) -> ContentItem:
    values: dict[str, object] = {
        "id": "page_home_1",
        "type": ContentType.PAGE,
        "title": "Home",
        "slug": "home",
        "content": {},
        "metadata": None,
        "status": ContentStatus.PUBLISHED,
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    values.update(overrides)
    return ContentItem(**values)  # type: ignore[arg-type]


def test_empty_predicate_matches_everything() -> None:
    """An empty predicate selects every item."""
    assert Predicate().matches(_item())


def test_predicate_requires_every_term() -> None:
    """Terms are combined with logical AND."""
    predicate = Predicate.where(
        FieldEquals(ContentField.TYPE, ContentType.PAGE),
        FieldEquals(ContentField.STATUS, ContentStatus.DRAFT),
    )

    assert not predicate.matches(_item())
    assert predicate.matches(_item(status=ContentStatus.DRAFT))


def test_from_optional_skips_none_values() -> None:
    """Absent filters do not become terms."""
    predicate = Predicate.from_optional({
        ContentField.TYPE: None,
        ContentField.SLUG: "home",
    })

    assert predicate.terms == (FieldEquals(ContentField.SLUG, "home"),)


def test_and_returns_a_new_predicate() -> None:
    """Adding a term leaves the original predicate untouched."""
    base = Predicate.where(FieldEquals(ContentField.SLUG, "home"))
    narrowed = base.and_(ContentField.TYPE, ContentType.POST)

    assert len(base.terms) == 1
    assert len(narrowed.terms) == 2
    assert not narrowed.matches(_item())


def test_payload_fields_cannot_be_filtered() -> None:
    """Reject equality filters on opaque payload fields."""
    with pytest.raises(ValueError, match="cannot be used in a filter"):
        FieldEquals(ContentField.CONTENT, {})


@pytest.mark.parametrize("field", [ContentField.ID, ContentField.CREATED_AT])
def test_identity_fields_cannot_be_assigned(field: ContentField) -> None:
    """Reject assignments to ``id`` and ``created_at``."""
    with pytest.raises(ValueError, match="cannot be assigned"):
        FieldAssignment(field, "x")


def test_with_value_replaces_existing_assignment() -> None:
    """Setting a field twice keeps only the latest value."""
    later = _NOW + dt.timedelta(seconds=5)
    assignments = (
        FieldAssignments.of({ContentField.TITLE: "A", ContentField.UPDATED_AT: _NOW})
        .with_value(ContentField.UPDATED_AT, later)
    )

    assert assignments.as_dict() == {"title": "A", "updated_at": later}
    assert [a.field for a in assignments] == [
        ContentField.TITLE,
        ContentField.UPDATED_AT,
    ]


def test_apply_changes_only_assigned_fields() -> None:
    """Applying assignments preserves every other field."""
    item = _item(metadata={"order": 1})
    updated = FieldAssignments.of({ContentField.TITLE: "Welcome"}).apply(item)

    assert updated.title == "Welcome"
    assert updated.metadata == {"order": 1}
    assert updated.created_at == item.created_at
    assert not FieldAssignments()
