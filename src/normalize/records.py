from __future__ import annotations
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CotRecord:
    """One instrument's non-commercial positioning for one report date."""

    date: date
    symbol: str
    long: float
    short: float
    d_long: float
    d_short: float
    net: float
    d_net: float
