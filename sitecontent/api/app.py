"""Falcon ASGI application factory for the content API."""

from __future__ import annotations

import typing as typ

import falcon
from falcon import asgi

from sitecontent.content import ContentError

from .errors import (
    handle_content_error,
    handle_malformed_media,
    handle_unexpected_error,
)
from .resources import (
    ContentBulkResource,
    ContentCollectionResource,
    ContentItemResource,
    ContentSlugResource,
)

if typ.TYPE_CHECKING:
    from sitecontent.content import ContentService


def create_app(service: ContentService) -> asgi.App:
    """Build the Falcon ASGI application around an injected content service.

    Parameters
    ----------
    service : ContentService
        Service shared by every resource for the lifetime of the app.

    Returns
    -------
    falcon.asgi.App
        Application exposing the ``/content`` routes.
    """
    app = asgi.App()
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(ContentError, handle_content_error)
    app.add_error_handler(falcon.MediaMalformedError, handle_malformed_media)

    app.add_route("/content", ContentCollectionResource(service))
    app.add_route("/content/bulk", ContentBulkResource(service))
    app.add_route("/content/slug/{slug}", ContentSlugResource(service))
    app.add_route("/content/{item_id}", ContentItemResource(service))

    return app
