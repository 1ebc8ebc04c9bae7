"""SQLAlchemy ORM model for the content table.

All content items live in one ``content_items`` table keyed by ``id``. The
``content`` and ``metadata`` payloads are stored as opaque JSONB documents.

Examples
--------
Create the table directly (tests normally apply Alembic migrations):

>>> from sqlalchemy import create_engine
>>> engine = create_engine("postgresql://example")
>>> Base.metadata.create_all(engine)
"""

from __future__ import annotations

# SQLAlchemy evaluates annotations at runtime; keep stdlib types imported.
import datetime as dt  # noqa: TC003
import typing as typ

import sqlalchemy as sa
from sqlalchemy import orm
from sqlalchemy.dialects import postgresql

from sitecontent.content.domain import ContentStatus, ContentType


class Base(orm.DeclarativeBase):
    """Base class for content SQLAlchemy models.

    Notes
    -----
    Alembic and test scaffolding rely on ``Base.metadata``.
    """


CONTENT_TYPE = sa.Enum(
    ContentType,
    name="content_type",
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)
CONTENT_STATUS = sa.Enum(
    ContentStatus,
    name="content_status",
    values_callable=lambda enum_cls: [item.value for item in enum_cls],
)


class ContentItemRecord(Base):
    """SQLAlchemy model for content items.

    Attributes
    ----------
    id : str
        Primary key, ``{type}_{slug}_{token}``.
    type : ContentType
        Content kind.
    title : str
        Display title.
    slug : str
        URL-safe identifier; not unique.
    content : typing.Any
        Opaque JSON payload.
    metadata_ : dict[str, typing.Any] | None
        Free-form metadata, stored in the ``metadata`` column.
    status : ContentStatus
        Publication state.
    created_at : datetime.datetime
        Creation timestamp supplied by the service.
    updated_at : datetime.datetime
        Last-write timestamp supplied by the service.
    """

    __tablename__ = "content_items"

    id: orm.Mapped[str] = orm.mapped_column(sa.Text(), primary_key=True)
    type: orm.Mapped[ContentType] = orm.mapped_column(CONTENT_TYPE)
    title: orm.Mapped[str] = orm.mapped_column(sa.Text())
    slug: orm.Mapped[str] = orm.mapped_column(sa.Text())
    content: orm.Mapped[typ.Any] = orm.mapped_column(postgresql.JSONB)
    # ``metadata`` is reserved on declarative classes.
    metadata_: orm.Mapped[dict[str, typ.Any] | None] = orm.mapped_column(
        "metadata",
        postgresql.JSONB,
        nullable=True,
    )
    status: orm.Mapped[ContentStatus] = orm.mapped_column(
        CONTENT_STATUS,
        default=ContentStatus.DRAFT,
    )
    created_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
    )
    updated_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
    )
