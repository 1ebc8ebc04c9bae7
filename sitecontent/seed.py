"""Seed the content database from a JSON file.

The file holds either a JSON array of create payloads or an object with an
``items`` array. Items are created one after another through
``ContentService.bulk_create``; invalid items are reported and skipped.
Without a path the bundled sample site (pages, services, projects, team
members, and a post) is loaded.

Examples
--------
Load the bundled sample content into a fresh database::

    DATABASE_URL=postgresql+psycopg://localhost/site \
        sitecontent-seed --apply-migrations

Load a custom export::

    sitecontent-seed exports/content.json
"""

from __future__ import annotations

import argparse
import asyncio
import collections
import json
import pathlib
import typing as typ

from sitecontent.asgi import build_service, configure_runtime_logging, create_engine
from sitecontent.content.storage.alembic_helpers import apply_migrations
from sitecontent.settings import Settings, SettingsError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sitecontent.content import BulkCreateReport, ContentService


SAMPLE_SEED_PATH = (
    pathlib.Path(__file__).resolve().parent / "data" / "sample_content.json"
)


class SeedFileError(ValueError):
    """Raised when a seed file cannot be read as content payloads."""


def load_seed_items(path: pathlib.Path) -> list[object]:
    """Read create payloads from ``path``.

    Parameters
    ----------
    path : pathlib.Path
        JSON file holding an array of payloads or ``{"items": [...]}``.

    Returns
    -------
    list[object]
        The payloads in file order, not yet validated.

    Raises
    ------
    SeedFileError
        If the file is unreadable, not JSON, or has no payload array.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Cannot read seed file {path}: {exc}"
        raise SeedFileError(msg) from exc

    if isinstance(document, dict):
        document = document.get("items")
    if not isinstance(document, list):
        msg = f"Seed file {path} must contain a JSON array of content items."
        raise SeedFileError(msg)
    return typ.cast("list[object]", document)


async def seed_content(
    service: ContentService,
    items: cabc.Sequence[object],
) -> BulkCreateReport:
    """Create ``items`` through ``service`` with per-item failure isolation."""
    return await service.bulk_create(items)


def summarise_report(report: BulkCreateReport) -> list[str]:
    """Describe a seed run as printable lines, counting items per type."""
    created = report.created
    lines = [f"Created {len(created)} of {len(report.outcomes)} content items."]
    counts = collections.Counter(item.type.value for item in created)
    lines.extend(f"  - {count} {content_type}" for content_type, count in counts.items())
    for index, outcome in enumerate(report.outcomes):
        if outcome.error is not None:
            lines.append(f"  ! item {index} skipped: {outcome.error}")
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bulk-load content items from a JSON file.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=pathlib.Path,
        default=SAMPLE_SEED_PATH,
        help=(
            "JSON file with an array of content items or an 'items' array; "
            "defaults to the bundled sample site."
        ),
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this run.",
    )
    parser.add_argument(
        "--apply-migrations",
        action="store_true",
        help="Upgrade the database schema before seeding.",
    )
    return parser


async def _main_async(argv: cabc.Sequence[str] | None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.database_url:
        settings = Settings(database_url=args.database_url, log_level=settings.log_level)
    configure_runtime_logging(settings)

    try:
        items = load_seed_items(args.path)
        engine = create_engine(settings)
    except (SeedFileError, SettingsError) as exc:
        parser.error(str(exc))

    try:
        if args.apply_migrations:
            await apply_migrations(engine)
        report = await seed_content(build_service(engine), items)
    finally:
        await engine.dispose()

    for line in summarise_report(report):
        print(line)
    return 1 if report.failures else 0


def main(argv: cabc.Sequence[str] | None = None) -> int:
    """Run the seed CLI."""
    return asyncio.run(_main_async(argv))


if __name__ == "__main__":
    raise SystemExit(main())
