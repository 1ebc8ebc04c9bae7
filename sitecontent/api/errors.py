"""Falcon error handlers mapping content errors to HTTP responses.

Validation failures return 400 with field-level ``details``, duplicate ids
409, missing items 404, and every other failure 500.
"""

from __future__ import annotations

import typing as typ

import falcon

from sitecontent.content import (
    ContentError,
    DuplicateKeyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from sitecontent.logging import get_logger, log_error

from .serializers import failure, serialize_field_issue

if typ.TYPE_CHECKING:
    from falcon import asgi

logger = get_logger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[ContentError], str, str], ...] = (
    (ValidationError, falcon.HTTP_400, "Validation error"),
    (DuplicateKeyError, falcon.HTTP_409, "Content with this ID already exists"),
    (NotFoundError, falcon.HTTP_404, "Content not found"),
    (StorageError, falcon.HTTP_500, "Content storage failure"),
)


def _classify(exc: ContentError) -> tuple[str, str]:
    for error_type, status, category in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status, category
    return falcon.HTTP_500, "Content operation failed"


async def handle_content_error(
    req: asgi.Request,
    resp: asgi.Response,
    exc: ContentError,
    params: dict[str, object],
) -> None:
    """Render a ``ContentError`` as a failure envelope."""
    del params
    status, category = _classify(exc)
    extra: dict[str, object] = {"code": exc.code}
    if isinstance(exc, ValidationError):
        extra["details"] = [serialize_field_issue(issue) for issue in exc.issues]
    if status == falcon.HTTP_500:
        log_error(logger, "%s %s failed: %s", req.method, req.path, exc)
    resp.media = failure(category, str(exc), **extra)
    resp.status = status


async def handle_malformed_media(
    req: asgi.Request,
    resp: asgi.Response,
    exc: falcon.MediaMalformedError,
    params: dict[str, object],
) -> None:
    """Render an unparseable request body as a validation failure."""
    del req, params
    message = exc.description or "Request body could not be parsed."
    resp.media = failure(
        "Validation error",
        message,
        code="validation_error",
        details=[{"field": "$", "message": "must be valid JSON."}],
    )
    resp.status = falcon.HTTP_400


async def handle_unexpected_error(
    req: asgi.Request,
    resp: asgi.Response,
    exc: Exception,
    params: dict[str, object],
) -> None:
    """Render any uncaught non-HTTP exception as a generic 500 envelope."""
    del params
    log_error(logger, "%s %s failed unexpectedly.", req.method, req.path, exc_info=exc)
    resp.media = failure("Internal server error", "The request could not be completed.")
    resp.status = falcon.HTTP_500
