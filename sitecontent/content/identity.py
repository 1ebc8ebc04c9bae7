"""Identifier synthesis for content items.

Identifiers take the form ``{type}_{slug}_{token}`` where the token is the
creation time in epoch milliseconds. Tokens are strictly increasing within a
generator, so items created in the same millisecond still get distinct ids.
"""

from __future__ import annotations

import datetime as dt
import threading
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .domain import ContentType


def _epoch_millis(now: dt.datetime) -> int:
    return int(now.timestamp() * 1000)


class ContentIdFactory:
    """Build content identifiers with a monotonic millisecond token.

    Parameters
    ----------
    clock : collections.abc.Callable[[], dt.datetime], optional
        Source of the current time; defaults to UTC wall-clock time.
    """

    def __init__(
        self,
        clock: cabc.Callable[[], dt.datetime] | None = None,
    ) -> None:
        self._clock = clock or (lambda: dt.datetime.now(dt.UTC))
        self._lock = threading.Lock()
        self._last_token = 0

    def next_token(self) -> int:
        """Return a token greater than every token issued before."""
        candidate = _epoch_millis(self._clock())
        with self._lock:
            token = max(candidate, self._last_token + 1)
            self._last_token = token
        return token

    def __call__(self, content_type: ContentType, slug: str) -> str:
        """Return a new identifier for an item of ``content_type``."""
        return f"{content_type.value}_{slug}_{self.next_token()}"
