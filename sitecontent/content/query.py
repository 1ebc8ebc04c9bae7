"""Typed predicates and field assignments for content repositories.

Queries and updates are described with ``ContentField`` members rather than
free-form strings, so each repository adapter resolves field names (including
reserved words such as ``type``) in one place.

Examples
--------
Select published pages and describe a title change:

>>> predicate = Predicate.where(
...     FieldEquals(ContentField.TYPE, ContentType.PAGE),
...     FieldEquals(ContentField.STATUS, ContentStatus.PUBLISHED),
... )
>>> changes = FieldAssignments.of({ContentField.TITLE: "Home"})
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    from .domain import ContentItem


class ContentField(enum.StrEnum):
    """Attribute names of ``ContentItem``."""

    ID = "id"
    TYPE = "type"
    TITLE = "title"
    SLUG = "slug"
    CONTENT = "content"
    METADATA = "metadata"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


FILTERABLE_FIELDS: frozenset[ContentField] = frozenset({
    ContentField.ID,
    ContentField.TYPE,
    ContentField.TITLE,
    ContentField.SLUG,
    ContentField.STATUS,
})
ASSIGNABLE_FIELDS: frozenset[ContentField] = frozenset({
    ContentField.TYPE,
    ContentField.TITLE,
    ContentField.SLUG,
    ContentField.CONTENT,
    ContentField.METADATA,
    ContentField.STATUS,
    ContentField.UPDATED_AT,
})


@dc.dataclass(frozen=True, slots=True)
class FieldEquals:
    """Equality test against one scalar content field."""

    field: ContentField
    value: object

    def __post_init__(self) -> None:
        """Reject fields that cannot be compared by equality."""
        if self.field not in FILTERABLE_FIELDS:
            msg = f"Field {self.field.value!r} cannot be used in a filter."
            raise ValueError(msg)

    def matches(self, item: ContentItem) -> bool:
        """Return True when ``item`` holds ``value`` in ``field``."""
        return getattr(item, self.field.value) == self.value


@dc.dataclass(frozen=True, slots=True)
class Predicate:
    """Conjunction of equality tests; an empty predicate matches everything."""

    terms: tuple[FieldEquals, ...] = ()

    @classmethod
    def where(cls, *terms: FieldEquals) -> Predicate:
        """Build a predicate from equality terms."""
        return cls(terms=terms)

    @classmethod
    def from_optional(
        cls,
        conditions: cabc.Mapping[ContentField, object | None],
    ) -> Predicate:
        """Build a predicate, skipping conditions whose value is None."""
        return cls(
            terms=tuple(
                FieldEquals(field, value)
                for field, value in conditions.items()
                if value is not None
            )
        )

    def and_(self, field: ContentField, value: object) -> Predicate:
        """Return a new predicate with one more equality term."""
        return Predicate(terms=(*self.terms, FieldEquals(field, value)))

    def matches(self, item: ContentItem) -> bool:
        """Return True when every term matches ``item``."""
        return all(term.matches(item) for term in self.terms)


@dc.dataclass(frozen=True, slots=True)
class FieldAssignment:
    """New value for one mutable content field."""

    field: ContentField
    value: object

    def __post_init__(self) -> None:
        """Reject identity and creation fields."""
        if self.field not in ASSIGNABLE_FIELDS:
            msg = f"Field {self.field.value!r} cannot be assigned."
            raise ValueError(msg)


@dc.dataclass(frozen=True, slots=True)
class FieldAssignments:
    """Ordered set of field assignments applied by a single update."""

    assignments: tuple[FieldAssignment, ...] = ()

    @classmethod
    def of(cls, values: cabc.Mapping[ContentField, object]) -> FieldAssignments:
        """Build assignments from a field-to-value mapping."""
        return cls(
            assignments=tuple(
                FieldAssignment(field, value) for field, value in values.items()
            )
        )

    def with_value(self, field: ContentField, value: object) -> FieldAssignments:
        """Return a copy where ``field`` is set to ``value``."""
        kept = tuple(item for item in self.assignments if item.field is not field)
        return FieldAssignments(assignments=(*kept, FieldAssignment(field, value)))

    def as_dict(self) -> dict[str, object]:
        """Return assignments keyed by ``ContentItem`` attribute name."""
        return {item.field.value: item.value for item in self.assignments}

    def apply(self, item: ContentItem) -> ContentItem:
        """Return ``item`` with the assignments applied."""
        return dc.replace(item, **self.as_dict())

    def __bool__(self) -> bool:
        """Return True when at least one field is assigned."""
        return bool(self.assignments)

    def __iter__(self) -> cabc.Iterator[FieldAssignment]:
        """Iterate assignments in insertion order."""
        return iter(self.assignments)
