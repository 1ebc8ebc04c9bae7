"""Unit tests for content payload validation in ``sitecontent.content.schema``.

Run these tests directly with:

```bash
python -m pytest -v tests/test_content_schema.py
```
"""

from __future__ import annotations

import datetime as dt

import pytest

from sitecontent.content import (
    ContentField,
    ContentStatus,
    ContentType,
    FieldIssue,
    ValidationError,
    validate_create_input,
    validate_record,
    validate_update_input,
)
from sitecontent.content.schema import coerce_content_status, coerce_content_type


def _issue_fields(exc: ValidationError) -> list[str]:
    return [issue.field for issue in exc.issues]


class TestCreateInput:
    """Tests for create payload validation."""

    @staticmethod
    def test_minimal_payload_defaults_to_draft() -> None:
        """Accept the four required keys and default ``status``."""
        draft = validate_create_input({
            "type": "page",
            "title": "Home",
            "slug": "home",
            "content": {"hero": "Hi"},
        })

        assert draft.type is ContentType.PAGE
        assert draft.status is ContentStatus.DRAFT, "Expected draft default status."
        assert draft.metadata is None
        assert draft.content == {"hero": "Hi"}

    @staticmethod
    def test_team_member_type_is_accepted() -> None:
        """Accept the hyphenated ``team-member`` type."""
        draft = validate_create_input({
            "type": "team-member",
            "title": "Ada",
            "slug": "ada",
            "content": {"role": "Engineer"},
            "metadata": {"order": 1},
            "status": "published",
        })

        assert draft.type is ContentType.TEAM_MEMBER
        assert draft.status is ContentStatus.PUBLISHED
        assert draft.metadata == {"order": 1}

    @staticmethod
    def test_server_and_unknown_keys_are_stripped() -> None:
        """Ignore ``id``, timestamps, and keys outside the schema."""
        draft = validate_create_input({
            "id": "custom",
            "createdAt": "2020-01-01T00:00:00Z",
            "updatedAt": "2020-01-01T00:00:00Z",
            "type": "post",
            "title": "Hello",
            "slug": "hello",
            "content": "plain text",
            "author": "someone",
        })

        assert draft.slug == "hello"
        assert draft.content == "plain text", "Expected any JSON value as content."
        assert not hasattr(draft, "author")

    @staticmethod
    def test_every_missing_field_is_reported() -> None:
        """Report all missing required keys in one error."""
        with pytest.raises(ValidationError) as exc_info:
            validate_create_input({})

        assert _issue_fields(exc_info.value) == ["type", "title", "slug", "content"]
        assert exc_info.value.code == "validation_error"

    @staticmethod
    def test_invalid_values_are_reported_per_field() -> None:
        """Report unknown enum values, blank strings, and bad metadata."""
        with pytest.raises(ValidationError) as exc_info:
            validate_create_input({
                "type": "article",
                "title": "",
                "slug": "   ",
                "content": {},
                "metadata": ["not", "an", "object"],
                "status": "live",
            })

        assert _issue_fields(exc_info.value) == [
            "type",
            "title",
            "slug",
            "metadata",
            "status",
        ]
        assert "'article'" in str(exc_info.value)

    @staticmethod
    def test_non_object_payload_is_rejected() -> None:
        """Reject payloads that are not JSON objects."""
        with pytest.raises(ValidationError) as exc_info:
            validate_create_input(["page"])

        assert exc_info.value.issues == (FieldIssue("$", "must be a JSON object."),)

    @staticmethod
    def test_content_is_copied() -> None:
        """Decouple the draft from the caller's mutable payload."""
        content = {"sections": [1, 2]}
        draft = validate_create_input({
            "type": "page",
            "title": "Home",
            "slug": "home",
            "content": content,
        })
        content["sections"].append(3)

        assert draft.content == {"sections": [1, 2]}


class TestUpdateInput:
    """Tests for partial update validation."""

    @staticmethod
    def test_only_supplied_fields_are_kept() -> None:
        """Return changes for exactly the keys present."""
        changes = validate_update_input({"title": "New", "status": "archived"})

        assert changes.fields == {
            ContentField.TITLE: "New",
            ContentField.STATUS: ContentStatus.ARCHIVED,
        }

    @staticmethod
    def test_empty_payload_is_valid() -> None:
        """Accept an empty update."""
        assert validate_update_input({}).is_empty

    @staticmethod
    def test_identity_fields_are_rejected() -> None:
        """Reject ``id`` and ``createdAt`` changes."""
        with pytest.raises(ValidationError) as exc_info:
            validate_update_input({"id": "x", "createdAt": "2020-01-01", "title": "T"})

        assert _issue_fields(exc_info.value) == ["id", "createdAt"]

    @staticmethod
    def test_updated_at_is_ignored() -> None:
        """Drop caller-supplied ``updatedAt``."""
        changes = validate_update_input({"updatedAt": "2020-01-01T00:00:00Z"})

        assert changes.is_empty

    @staticmethod
    def test_metadata_can_be_cleared() -> None:
        """Allow ``metadata: null`` to remove metadata."""
        changes = validate_update_input({"metadata": None})

        assert changes.fields == {ContentField.METADATA: None}


class TestRecord:
    """Tests for full record validation."""

    @staticmethod
    def test_record_with_timestamps() -> None:
        """Parse a complete stored record."""
        item = validate_record({
            "id": "page_home_1",
            "type": "page",
            "title": "Home",
            "slug": "home",
            "content": {},
            "status": "published",
            "createdAt": "2026-01-01T00:00:00+00:00",
            "updatedAt": "2026-01-02T00:00:00+00:00",
        })

        assert item.id == "page_home_1"
        assert item.created_at == dt.datetime(2026, 1, 1, tzinfo=dt.UTC)
        assert item.updated_at == dt.datetime(2026, 1, 2, tzinfo=dt.UTC)

    @staticmethod
    def test_record_issues_are_combined() -> None:
        """Report record-level and draft-level issues together."""
        with pytest.raises(ValidationError) as exc_info:
            validate_record({"createdAt": 5, "type": "page"})

        fields = _issue_fields(exc_info.value)
        assert fields[:2] == ["id", "createdAt"]
        assert {"title", "slug", "content"} <= set(fields)


class TestFilterCoercion:
    """Tests for query filter coercion."""

    @staticmethod
    def test_known_values_are_coerced() -> None:
        """Convert filter strings to enum members."""
        assert coerce_content_type("service") is ContentType.SERVICE
        assert coerce_content_status("draft") is ContentStatus.DRAFT
        assert coerce_content_type(None) is None

    @staticmethod
    @pytest.mark.parametrize(
        ("coerce", "value"),
        [(coerce_content_type, "blog"), (coerce_content_status, "live")],
    )
    def test_unknown_values_raise(coerce: object, value: str) -> None:
        """Raise ``ValidationError`` for values outside the enumeration."""
        with pytest.raises(ValidationError):
            coerce(value)  # type: ignore[operator]
