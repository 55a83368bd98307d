"""Read-only queries over the canonical record sequence."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Sequence

import pandas as pd

from src.common.dates import to_date
from src.normalize.canonical_schema import POSITION_COLUMNS
from src.normalize.records import CotRecord


@dataclass(frozen=True)
class DateBounds:
    start: date
    end: date


def distinct_symbols(records: Sequence[CotRecord]) -> tuple[str, ...]:
    return tuple(sorted({r.symbol for r in records}))


def date_bounds(records: Sequence[CotRecord]) -> DateBounds | None:
    """Earliest and latest report date across all symbols, None when empty."""
    if not records:
        return None
    dates = [r.date for r in records]
    return DateBounds(start=min(dates), end=max(dates))


def latest_date(records: Sequence[CotRecord], symbol: str | None = None) -> date | None:
    dates = [r.date for r in records if symbol is None or r.symbol == symbol]
    return max(dates) if dates else None


def filter_by_window(records: Sequence[CotRecord], symbol: str, start, end) -> tuple[CotRecord, ...]:
    """
    Records of `symbol` with start <= date <= end, in ascending date order.

    Bounds may be dates, datetimes or ISO strings and may be given in either order.
    """
    lo, hi = to_date(start), to_date(end)
    if lo > hi:
        lo, hi = hi, lo
    matched = [r for r in records if r.symbol == symbol and lo <= r.date <= hi]
    return tuple(sorted(matched, key=lambda r: r.date))


def records_to_frame(records: Sequence[CotRecord]) -> pd.DataFrame:
    """DataFrame copy for charting; the record sequence itself is never modified."""
    if not records:
        return pd.DataFrame(columns=POSITION_COLUMNS)
    df = pd.DataFrame([asdict(r) for r in records], columns=POSITION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df
