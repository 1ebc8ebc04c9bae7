"""Create the content_items table and its enumerations.

Every content item lives in one table keyed by ``id``; there are no
secondary indexes, version columns, or soft-delete markers.

Examples
--------
Apply the migration with Alembic:

>>> alembic upgrade head
"""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def _content_type_enum() -> postgresql.ENUM:
    return postgresql.ENUM(
        "page",
        "post",
        "project",
        "service",
        "team-member",
        name="content_type",
        create_type=False,
    )


def _content_status_enum() -> postgresql.ENUM:
    return postgresql.ENUM(
        "draft",
        "published",
        "archived",
        name="content_status",
        create_type=False,
    )


def upgrade() -> None:
    """Apply schema changes."""
    content_type = _content_type_enum()
    content_status = _content_status_enum()

    bind = op.get_bind()
    content_type.create(bind, checkfirst=True)
    content_status.create(bind, checkfirst=True)

    op.create_table(
        "content_items",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("type", content_type, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("content", postgresql.JSONB(), nullable=False),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column("status", content_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    """Revert schema changes."""
    op.drop_table("content_items")
    bind = op.get_bind()
    _content_status_enum().drop(bind, checkfirst=True)
    _content_type_enum().drop(bind, checkfirst=True)
