"""Tests for content identifier synthesis."""

from __future__ import annotations

import datetime as dt
import re

from sitecontent.content import ContentIdFactory, ContentType

_FROZEN = dt.datetime(2026, 10, 19, 12, 0, tzinfo=dt.UTC)


def test_identifier_format() -> None:
    """Identifiers join type, slug, and an epoch-millisecond token."""
    factory = ContentIdFactory(lambda: _FROZEN)

    item_id = factory(ContentType.TEAM_MEMBER, "ada")

    assert item_id == f"team-member_ada_{int(_FROZEN.timestamp() * 1000)}"
    assert re.fullmatch(r"team-member_ada_\d+", item_id)


def test_tokens_increase_within_one_millisecond() -> None:
    """A frozen clock still yields distinct, increasing tokens."""
    factory = ContentIdFactory(lambda: _FROZEN)

    tokens = [factory.next_token() for _ in range(5)]

    assert tokens == sorted(set(tokens)), "Expected strictly increasing tokens."
    assert factory(ContentType.PAGE, "home") != factory(ContentType.PAGE, "home")


def test_clock_moving_backwards_does_not_repeat_tokens() -> None:
    """Tokens keep increasing when the clock steps back."""
    readings = iter([_FROZEN, _FROZEN - dt.timedelta(seconds=1)])
    factory = ContentIdFactory(lambda: next(readings))

    first = factory.next_token()
    second = factory.next_token()

    assert second == first + 1
