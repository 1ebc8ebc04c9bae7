"""Response serializers for the content API.

Successful responses are wrapped as ``{"success": true, "data": ...}``;
failures as ``{"success": false, "error": ..., "message": ...}``.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from sitecontent.content import (
        BulkCreateOutcome,
        BulkCreateReport,
        ContentItem,
        FieldIssue,
    )

    from .types import JsonPayload


def serialize_content_item(item: ContentItem) -> JsonPayload:
    """Serialize a content item using wire field names."""
    payload: JsonPayload = {
        "id": item.id,
        "type": item.type.value,
        "title": item.title,
        "slug": item.slug,
        "content": item.content,
        "status": item.status.value,
        "createdAt": item.created_at.isoformat(),
        "updatedAt": item.updated_at.isoformat(),
    }
    if item.metadata is not None:
        payload["metadata"] = item.metadata
    return payload


def serialize_field_issue(issue: FieldIssue) -> JsonPayload:
    """Serialize one validation issue."""
    return {"field": issue.field, "message": issue.message}


def _serialize_failure(index: int, outcome: BulkCreateOutcome) -> JsonPayload:
    error = outcome.error
    failure: JsonPayload = {
        "index": index,
        "error": error.code if error is not None else "unknown",
        "message": str(error),
    }
    issues = getattr(error, "issues", None)
    if issues:
        failure["details"] = [serialize_field_issue(issue) for issue in issues]
    return failure


def serialize_bulk_report(report: BulkCreateReport) -> JsonPayload:
    """Serialize a bulk create report."""
    created = report.created
    return {
        "success": True,
        "data": [serialize_content_item(item) for item in created],
        "message": f"{len(created)} items created successfully",
        "total": len(created),
        "failures": [
            _serialize_failure(index, outcome)
            for index, outcome in enumerate(report.outcomes)
            if not outcome.succeeded
        ],
    }


def success(data: object, **extra: object) -> JsonPayload:
    """Wrap ``data`` in a success envelope."""
    return {"success": True, "data": data, **extra}


def failure(error: str, message: str, **extra: object) -> JsonPayload:
    """Build a failure envelope."""
    return {"success": False, "error": error, "message": message, **extra}
