"""Falcon resources for the content endpoints.

Resources translate requests into ``ContentService`` calls; errors raised by
the service propagate to the handlers registered in ``create_app``.

Examples
--------
>>> app.add_route("/content", ContentCollectionResource(service))
>>> app.add_route("/content/{item_id}", ContentItemResource(service))
"""

from __future__ import annotations

import typing as typ

import falcon

from .helpers import (
    optional_param,
    require_found,
    require_items_list,
    require_payload_dict,
)
from .serializers import serialize_bulk_report, serialize_content_item, success

if typ.TYPE_CHECKING:
    from falcon import asgi

    from sitecontent.content import ContentService


class _ServiceResource:
    """Hold the injected content service."""

    def __init__(self, service: ContentService) -> None:
        self._service = service


class ContentCollectionResource(_ServiceResource):
    """List content items and create new ones."""

    async def on_get(self, req: asgi.Request, resp: asgi.Response) -> None:
        """List items, optionally filtered by ``type`` and ``status``."""
        items = await self._service.list_items(
            optional_param(req, "type"),
            optional_param(req, "status"),
        )
        resp.media = success(
            [serialize_content_item(item) for item in items],
            count=len(items),
        )
        resp.status = falcon.HTTP_200

    async def on_post(self, req: asgi.Request, resp: asgi.Response) -> None:
        """Create one content item."""
        payload = require_payload_dict(await req.get_media())
        item = await self._service.create(payload)
        resp.media = success(
            serialize_content_item(item),
            message="Content created successfully",
        )
        resp.status = falcon.HTTP_201


class ContentBulkResource(_ServiceResource):
    """Create many content items with per-item failure isolation."""

    async def on_post(self, req: asgi.Request, resp: asgi.Response) -> None:
        """Create every valid item in ``items``; report the ones skipped."""
        payload = require_payload_dict(await req.get_media())
        report = await self._service.bulk_create(require_items_list(payload))
        resp.media = serialize_bulk_report(report)
        resp.status = falcon.HTTP_201


class ContentItemResource(_ServiceResource):
    """Fetch, update, and delete one content item by id."""

    async def on_get(
        self,
        req: asgi.Request,
        resp: asgi.Response,
        item_id: str,
    ) -> None:
        """Fetch one item."""
        del req
        item = require_found(await self._service.get_by_id(item_id), item_id)
        resp.media = success(serialize_content_item(item))
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: asgi.Request,
        resp: asgi.Response,
        item_id: str,
    ) -> None:
        """Merge the supplied fields into one item."""
        payload = require_payload_dict(await req.get_media())
        item = require_found(await self._service.update(item_id, payload), item_id)
        resp.media = success(
            serialize_content_item(item),
            message="Content updated successfully",
        )
        resp.status = falcon.HTTP_200

    on_patch = on_put

    async def on_delete(
        self,
        req: asgi.Request,
        resp: asgi.Response,
        item_id: str,
    ) -> None:
        """Delete one item."""
        del req
        require_found(await self._service.delete(item_id), item_id)
        resp.media = {"success": True, "message": "Content deleted successfully"}
        resp.status = falcon.HTTP_200


class ContentSlugResource(_ServiceResource):
    """Fetch a content item by slug, optionally scoped by ``type``."""

    async def on_get(
        self,
        req: asgi.Request,
        resp: asgi.Response,
        slug: str,
    ) -> None:
        """Fetch the first item with ``slug``."""
        item = require_found(
            await self._service.get_by_slug(slug, optional_param(req, "type")),
            slug,
        )
        resp.media = success(serialize_content_item(item))
        resp.status = falcon.HTTP_200
