"""Resolve semantic fields to the actual header names of a raw table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from src.common.errors import SchemaError
from src.normalize.canonical_schema import FIELD_ALIASES, REQUIRED_FIELDS


@dataclass(frozen=True)
class ColumnMap:
    date: str
    symbol: str
    long: str
    short: str
    d_long: str | None = None
    d_short: str | None = None

    @property
    def has_deltas(self) -> bool:
        """Deltas are sourced only when both columns exist; checked once per dataset."""
        return self.d_long is not None and self.d_short is not None


def _pick(lookup: dict[str, str], aliases: Iterable[str]) -> str | None:
    for alias in aliases:
        if alias in lookup:
            return lookup[alias]
    return None


def resolve_columns(headers: Iterable[str]) -> ColumnMap:
    """
    Map date/symbol/long/short (+ optional d_long/d_short) to header names.

    Headers are compared case-insensitively, ignoring surrounding whitespace;
    the original header text is returned. Raises SchemaError if a required field is missing.
    """
    headers = [h for h in headers if isinstance(h, str)]
    lookup: dict[str, str] = {}
    for h in headers:
        # first header wins when two differ only by case
        lookup.setdefault(h.strip().lower(), h)

    found = {field: _pick(lookup, aliases) for field, aliases in FIELD_ALIASES.items()}

    missing = [f for f in REQUIRED_FIELDS if found[f] is None]
    if missing:
        raise SchemaError(
            f"Required columns not found: {', '.join(missing)}. "
            f"Available columns: {', '.join(headers)}"
        )

    return ColumnMap(**found)
