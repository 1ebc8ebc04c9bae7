"""Shared type aliases for the Falcon content API."""

from __future__ import annotations

import typing as typ

JsonPayload: typ.TypeAlias = dict[str, object]
