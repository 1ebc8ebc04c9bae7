"""Content items, validation, and the content service.

Examples
--------
>>> from sitecontent.content.storage import InMemoryContentRepository
>>> service = ContentService(InMemoryContentRepository())
>>> item = await service.create(
...     {"type": "post", "title": "Hello", "slug": "hello", "content": {}}
... )
>>> report = await service.bulk_create([payload_a, payload_b])
"""

from .domain import ContentDraft, ContentItem, ContentStatus, ContentType, PutOutcome
from .errors import (
    ContentError,
    DuplicateKeyError,
    FieldIssue,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .identity import ContentIdFactory
from .ports import ContentRepository
from .query import (
    ContentField,
    FieldAssignment,
    FieldAssignments,
    FieldEquals,
    Predicate,
)
from .schema import (
    ContentChanges,
    validate_create_input,
    validate_record,
    validate_update_input,
)
from .service import BulkCreateOutcome, BulkCreateReport, ContentService

__all__: list[str] = [
    "BulkCreateOutcome",
    "BulkCreateReport",
    "ContentChanges",
    "ContentDraft",
    "ContentError",
    "ContentField",
    "ContentIdFactory",
    "ContentItem",
    "ContentRepository",
    "ContentService",
    "ContentStatus",
    "ContentType",
    "DuplicateKeyError",
    "FieldAssignment",
    "FieldAssignments",
    "FieldEquals",
    "FieldIssue",
    "NotFoundError",
    "Predicate",
    "PutOutcome",
    "StorageError",
    "ValidationError",
    "validate_create_input",
    "validate_record",
    "validate_update_input",
]
