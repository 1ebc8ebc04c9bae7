"""femtologging helpers shared by the content service and its adapters.

The service, repositories, and HTTP façade log through these helpers so level
handling and percent-style formatting stay uniform.

Examples
--------
>>> level, used_default = configure_logging("DEBUG")
>>> log_warning(get_logger(__name__), "Skipped item %s", "home")
"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``configure_logging``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_LEVEL_ALIASES: dict[str, LogLevel] = {"WARN": LogLevel.WARNING}


def normalise_level(level: str | None) -> tuple[LogLevel, bool]:
    """Resolve a configured level name.

    Parameters
    ----------
    level : str | None
        Level name from configuration, matched case-insensitively.

    Returns
    -------
    tuple[LogLevel, bool]
        The resolved level and whether the ``INFO`` default was used because
        the input was missing or unrecognised.
    """
    requested = level.strip().upper() if level else ""
    if requested in _LEVEL_ALIASES:
        return (_LEVEL_ALIASES[requested], False)
    if requested in LogLevel.__members__:
        return (LogLevel(requested), False)
    return (LogLevel.INFO, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging for the process.

    Parameters
    ----------
    level : str | None
        Requested log level, or None for the default.
    force : bool, optional
        Replace previously configured handlers.

    Returns
    -------
    tuple[str, bool]
        The effective level and whether the default was applied.
    """
    normalised, used_default = normalise_level(level)
    basicConfig(level=normalised, force=force)
    return (normalised, used_default)


class _SupportsLog(typ.Protocol):
    """Structural type for femtologging loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> None: ...


def log_at(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Format ``template % args`` and emit it at ``level``.

    Raises
    ------
    TypeError
        If the template and arguments do not align for percent formatting.
    """
    message = template % args if args else template
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an INFO message."""
    log_at(logger, LogLevel.INFO, template, *args, exc_info=exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit a WARNING message."""
    log_at(logger, LogLevel.WARNING, template, *args, exc_info=exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an ERROR message."""
    log_at(logger, LogLevel.ERROR, template, *args, exc_info=exc_info)


__all__ = (
    "LogLevel",
    "configure_logging",
    "get_logger",
    "log_at",
    "log_error",
    "log_info",
    "log_warning",
    "normalise_level",
)
