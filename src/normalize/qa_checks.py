from __future__ import annotations

from typing import Sequence

import pandas as pd

from src.compute.queries import records_to_frame
from src.normalize.records import CotRecord


def run_qa(records: Sequence[CotRecord]) -> list[str]:
    """
    Pipeline gate QA checks for the normalized dataset.

    Returns list of error messages (empty list = PASS).
    """
    errs = []
    df = records_to_frame(records)
    if df.empty:
        return errs

    # 1. net identity
    bad_net = (df["net"] != df["long"] - df["short"]).sum()
    if bad_net > 0:
        errs.append(f"net != long - short: {bad_net} rows")

    # 2. d_net identity
    bad_d_net = (df["d_net"] != df["d_long"] - df["d_short"]).sum()
    if bad_d_net > 0:
        errs.append(f"d_net != d_long - d_short: {bad_d_net} rows")

    # 3. per-symbol chronology
    unordered = [
        sym for sym, g in df.groupby("symbol", sort=True)
        if not g["date"].is_monotonic_increasing
    ]
    if unordered:
        errs.append(f"dates not ascending for symbols: {unordered}")

    # 4. empty symbols
    empty = (df["symbol"].astype(str).str.strip() == "").sum()
    if empty > 0:
        errs.append(f"empty symbol rows: {empty}")

    return errs


def qa_duplicates(records: Sequence[CotRecord]) -> list[str]:
    """Duplicate symbol+date pairs are kept (input order); reported as warnings only."""
    warns = []
    df = records_to_frame(records)
    if df.empty:
        return warns
    dup = df.duplicated(subset=["symbol", "date"])
    if dup.any():
        pairs = df.loc[dup, ["symbol", "date"]].drop_duplicates()
        sample = [f"{r.symbol}@{pd.Timestamp(r.date).date()}" for r in pairs.head(10).itertuples()]
        warns.append(f"duplicate symbol+date rows: {int(dup.sum())} (e.g. {', '.join(sample)})")
    return warns
