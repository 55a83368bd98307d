"""Typed coercion of raw cells and row rejection."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.common.dates import to_date
from src.common.errors import DateParseError
from src.normalize.column_map import ColumnMap

logger = logging.getLogger("cot_dashboard")


@dataclass(frozen=True)
class NormalizedRows:
    frame: pd.DataFrame
    rows_read: int
    rows_rejected: int


def coerce_date(value) -> object:
    """Return a date, or None when the cell is empty or unparseable."""
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    try:
        return to_date(value)
    except DateParseError:
        return None


def coerce_symbol(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.strip()


def coerce_number(series: pd.Series) -> pd.Series:
    """Numeric coercion never fails: empty, garbled or non-finite cells become 0."""
    s = series.fillna("").astype(str).str.strip()
    out = pd.to_numeric(s, errors="coerce").astype("float64")
    return out.replace([np.inf, -np.inf], np.nan).fillna(0.0)


def normalize_rows(raw: pd.DataFrame, columns: ColumnMap) -> NormalizedRows:
    """
    Convert raw text rows into typed position rows.

    Rows with an empty/unparseable date or an empty symbol are dropped.
    long/short are zero-filled; deltas are coerced only when both delta columns
    resolved, otherwise left NaN for derivation. net is computed here.
    The "_row" column keeps the input position for stable ordering.
    """
    dates = raw[columns.date].map(coerce_date)
    symbols = coerce_symbol(raw[columns.symbol])

    keep = dates.notna() & (symbols != "")
    rows_read = len(raw)
    rows_rejected = int((~keep).sum())
    if rows_rejected:
        logger.debug(f"[normalize] rejected {rows_rejected}/{rows_read} rows (missing symbol or bad date)")

    kept = raw[keep]
    out = pd.DataFrame({
        "_row": np.arange(rows_read)[keep.to_numpy(dtype=bool)],
        "date": dates[keep],
        "symbol": symbols[keep],
        "long": coerce_number(kept[columns.long]),
        "short": coerce_number(kept[columns.short]),
    })

    if columns.has_deltas:
        out["d_long"] = coerce_number(kept[columns.d_long])
        out["d_short"] = coerce_number(kept[columns.d_short])
    else:
        out["d_long"] = np.nan
        out["d_short"] = np.nan

    out["net"] = out["long"] - out["short"]
    out = out.reset_index(drop=True)

    return NormalizedRows(frame=out, rows_read=rows_read, rows_rejected=rows_rejected)
