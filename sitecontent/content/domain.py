"""Domain models for site content items."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import datetime as dt

JsonMapping: typ.TypeAlias = dict[str, object]


class ContentType(enum.StrEnum):
    """Kinds of content item served to the site frontends."""

    PAGE = "page"
    POST = "post"
    PROJECT = "project"
    SERVICE = "service"
    TEAM_MEMBER = "team-member"


class ContentStatus(enum.StrEnum):
    """Publication states for content items."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PutOutcome(enum.StrEnum):
    """Result of a put-if-absent write."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dc.dataclass(frozen=True, slots=True)
class ContentItem:
    """Persisted content record.

    Attributes
    ----------
    id : str
        Identifier assigned once at creation, ``{type}_{slug}_{token}``.
    type : ContentType
        Content kind; consumers interpret ``content`` according to it.
    title : str
        Human-readable title.
    slug : str
        URL-safe identifier, intended unique within ``type``.
    content : object
        Opaque JSON payload whose shape depends on ``type``.
    metadata : JsonMapping | None
        Optional free-form metadata.
    status : ContentStatus
        Publication state.
    created_at : dt.datetime
        Creation timestamp, never mutated.
    updated_at : dt.datetime
        Timestamp of the latest successful write.
    """

    id: str
    type: ContentType
    title: str
    slug: str
    content: object
    metadata: JsonMapping | None
    status: ContentStatus
    created_at: dt.datetime
    updated_at: dt.datetime


@dc.dataclass(frozen=True, slots=True)
class ContentDraft:
    """Validated input for creating a content item."""

    type: ContentType
    title: str
    slug: str
    content: object
    metadata: JsonMapping | None = None
    status: ContentStatus = ContentStatus.DRAFT
