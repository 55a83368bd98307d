from __future__ import annotations
from datetime import date, datetime

import pandas as pd

from src.common.errors import DateParseError


def to_date(x) -> date:
    """
    Coerce a report date value into a calendar date.

    Accepts date/datetime objects, pandas Timestamps and strings such as
    "2024-01-05", "2024-01-05T00:00:00" or "01/05/2024". Time-of-day is dropped.
    Raises DateParseError for empty or unparseable values.
    """
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if x is None:
        raise DateParseError("empty report date")

    s = str(x).strip()
    if not s:
        raise DateParseError("empty report date")

    # fast path: plain ISO dates are the common case
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass

    try:
        ts = pd.to_datetime(s)
    except (ValueError, TypeError, OverflowError) as e:
        raise DateParseError(f"unparseable report date: {s!r}") from e
    if pd.isna(ts):
        raise DateParseError(f"unparseable report date: {s!r}")
    return ts.date()
