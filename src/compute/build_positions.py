"""Group normalized rows by instrument, derive deltas and flatten into records."""

from __future__ import annotations

import logging

import pandas as pd

from src.normalize.records import CotRecord

logger = logging.getLogger("cot_dashboard")

# _row (input position) breaks ties between equal dates so ordering stays stable
SORT_KEYS = ["symbol", "date", "_row"]


def derive_deltas(rows: pd.DataFrame, deltas_sourced: bool) -> pd.DataFrame:
    """
    Sort each symbol chronologically and complete d_long/d_short/d_net.

    If the dataset had no delta columns, deltas are the difference against the
    previous report of the same symbol (0 for the first report). Sourced deltas
    pass through unchanged. d_net is always recomputed.
    Rows sharing a date keep their input order; nothing is deduplicated.
    """
    df = rows.sort_values(SORT_KEYS, kind="mergesort").reset_index(drop=True)

    if not deltas_sourced:
        # WoW changes: diff vs prior report within each symbol
        g = df.groupby("symbol", sort=False)
        df["d_long"] = g["long"].diff().fillna(0.0)
        df["d_short"] = g["short"].diff().fillna(0.0)

    df["d_net"] = df["d_long"] - df["d_short"]
    return df


def flatten_positions(positions: pd.DataFrame) -> tuple[CotRecord, ...]:
    """Canonical order: symbol (case-sensitive code point order), then date ascending."""
    df = positions.sort_values(SORT_KEYS, kind="mergesort")
    records = tuple(
        CotRecord(
            date=r.date,
            symbol=r.symbol,
            long=float(r.long),
            short=float(r.short),
            d_long=float(r.d_long),
            d_short=float(r.d_short),
            net=float(r.net),
            d_net=float(r.d_net),
        )
        for r in df.itertuples(index=False)
    )
    logger.debug(f"[compute] flattened {len(records)} records")
    return records


def build_positions(rows: pd.DataFrame, deltas_sourced: bool) -> tuple[CotRecord, ...]:
    return flatten_positions(derive_deltas(rows, deltas_sourced))
