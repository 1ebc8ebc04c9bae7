"""Environment-driven runtime settings.

Examples
--------
>>> settings = Settings.from_env({"DATABASE_URL": "postgresql+psycopg://..."})
>>> settings.log_level
'INFO'
"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DATABASE_URL_ENV = "DATABASE_URL"
LOG_LEVEL_ENV = "SITECONTENT_LOG_LEVEL"


class SettingsError(RuntimeError):
    """Raised when required runtime configuration is missing."""


@dc.dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration for the SQL-backed service.

    Attributes
    ----------
    database_url : str | None
        SQLAlchemy async URL of the content database.
    log_level : str | None
        Requested femtologging level; unknown values fall back to ``INFO``.
    """

    database_url: str | None = None
    log_level: str | None = None

    @classmethod
    def from_env(cls, environ: cabc.Mapping[str, str] | None = None) -> Settings:
        """Read settings from ``environ`` (defaults to ``os.environ``)."""
        source = os.environ if environ is None else environ
        database_url = source.get(DATABASE_URL_ENV, "").strip()
        return cls(
            database_url=database_url or None,
            log_level=source.get(LOG_LEVEL_ENV),
        )

    def require_database_url(self) -> str:
        """Return the database URL or raise ``SettingsError``."""
        if self.database_url is None:
            msg = f"{DATABASE_URL_ENV} must be set to reach the content database."
            raise SettingsError(msg)
        return self.database_url


__all__ = ["DATABASE_URL_ENV", "LOG_LEVEL_ENV", "Settings", "SettingsError"]
