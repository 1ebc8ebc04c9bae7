"""REST API adapter for site content.

Examples
--------
>>> from sitecontent.api import create_app
>>> app = create_app(ContentService(repository))  # doctest: +SKIP
"""

from __future__ import annotations

from .app import create_app

__all__ = ["create_app"]
