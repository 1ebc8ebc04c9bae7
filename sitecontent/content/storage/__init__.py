"""Persistence adapters for content items.

Two ``ContentRepository`` implementations are provided: an in-memory map for
tests and local tooling, and a SQLAlchemy adapter over the ``content_items``
table.

Examples
--------
>>> repository = SqlAlchemyContentRepository(session_factory)
>>> await repository.get("page_home_1718000000000")
"""

from .memory import InMemoryContentRepository
from .models import Base, ContentItemRecord
from .repositories import SqlAlchemyContentRepository

__all__ = (
    "Base",
    "ContentItemRecord",
    "InMemoryContentRepository",
    "SqlAlchemyContentRepository",
)
