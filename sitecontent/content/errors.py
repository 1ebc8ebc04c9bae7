"""Exceptions raised by the content service and its repositories.

Every error carries a machine-readable ``code`` and a ``retryable`` hint so
adapters can map failures to transport responses without string matching.

Examples
--------
>>> raise DuplicateKeyError("Content item page_home_1 already exists.")
"""

import dataclasses as dc
import typing as typ


class ContentError(Exception):
    """Base exception with structured metadata for content operations."""

    error_code: typ.ClassVar[str] = "content_error"
    default_retryable: typ.ClassVar[bool] = False

    code: str
    item_id: str | None
    retryable: bool

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        item_id: str | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else type(self).error_code
        self.item_id = item_id
        self.retryable = (
            type(self).default_retryable if retryable is None else retryable
        )


@dc.dataclass(frozen=True, slots=True)
class FieldIssue:
    """One offending input field and the reason it was rejected."""

    field: str
    message: str


class ValidationError(ContentError):
    """Raised when input does not match the content schema.

    Attributes
    ----------
    issues : tuple[FieldIssue, ...]
        Every offending field, in the order the validator found them.
    """

    error_code: typ.ClassVar[str] = "validation_error"

    issues: tuple[FieldIssue, ...]

    def __init__(self, issues: typ.Iterable[FieldIssue]) -> None:
        self.issues = tuple(issues)
        summary = "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues)
        super().__init__(f"Invalid content payload: {summary}")


class DuplicateKeyError(ContentError):
    """Raised when a create collides with an existing identifier."""

    error_code: typ.ClassVar[str] = "duplicate_key"


class NotFoundError(ContentError):
    """Raised by adapters when an addressed content item does not exist."""

    error_code: typ.ClassVar[str] = "not_found"


class StorageError(ContentError):
    """Raised when the backing store fails; callers decide whether to retry."""

    error_code: typ.ClassVar[str] = "storage_error"
    default_retryable: typ.ClassVar[bool] = True
