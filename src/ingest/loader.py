"""Load entry point: fetch -> parse -> normalize -> derive -> flatten."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date

import pandas as pd

from src.common.config import Settings, load_settings
from src.compute.build_positions import build_positions
from src.compute.queries import (
    DateBounds,
    date_bounds,
    distinct_symbols,
    filter_by_window,
    latest_date,
    records_to_frame,
)
from src.ingest.cot_fetcher import fetch_text
from src.normalize.cot_parser import parse_cot_text
from src.normalize.records import CotRecord
from src.normalize.rows import normalize_rows

logger = logging.getLogger("cot_dashboard")


@dataclass(frozen=True)
class CotDataset:
    records: tuple[CotRecord, ...]
    source: str
    rows_read: int
    rows_rejected: int
    deltas_sourced: bool

    def __len__(self) -> int:
        return len(self.records)

    def symbols(self) -> tuple[str, ...]:
        return distinct_symbols(self.records)

    def bounds(self) -> DateBounds | None:
        return date_bounds(self.records)

    def latest(self, symbol: str | None = None) -> date | None:
        return latest_date(self.records, symbol)

    def window(self, symbol: str, start, end) -> tuple[CotRecord, ...]:
        return filter_by_window(self.records, symbol, start, end)

    def to_frame(self) -> pd.DataFrame:
        return records_to_frame(self.records)


def build_dataset(text: str, source: str = "<text>", delimiter: str = ",") -> CotDataset:
    """Run the pure pipeline over already-received CSV text."""
    parsed = parse_cot_text(text, delimiter=delimiter)
    normalized = normalize_rows(parsed.df, parsed.columns)
    records = build_positions(normalized.frame, parsed.columns.has_deltas)
    return CotDataset(
        records=records,
        source=source,
        rows_read=normalized.rows_read,
        rows_rejected=normalized.rows_rejected,
        deltas_sourced=parsed.columns.has_deltas,
    )


def load(location: str | None = None, settings: Settings | None = None) -> CotDataset:
    """
    Fetch and normalize a COT table.

    Raises TransportError or SchemaError; rejected rows only shrink the result.
    """
    settings = settings or load_settings()
    location = location or settings.source

    fetched = fetch_text(location, timeout_s=settings.timeout_s, attempts=settings.retries)
    ds = build_dataset(fetched.text, source=fetched.location, delimiter=settings.delimiter)

    logger.info(
        f"[normalize] {location}: rows={ds.rows_read} kept={len(ds)} rejected={ds.rows_rejected} "
        f"symbols={len(ds.symbols())} deltas={'sourced' if ds.deltas_sourced else 'derived'}"
    )
    return ds


class LoadCoordinator:
    """
    Last-request-wins wrapper around load().

    Each run() takes a new token; its result is committed only if no newer
    request was issued while it was loading. Stale results are dropped.
    """

    def __init__(self, settings: Settings | None = None, loader=load):
        self._settings = settings
        self._loader = loader
        self._lock = threading.Lock()
        self._issued = 0
        self._current: CotDataset | None = None

    @property
    def current(self) -> CotDataset | None:
        with self._lock:
            return self._current

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def is_latest(self, token: int) -> bool:
        with self._lock:
            return token == self._issued

    def commit(self, token: int, dataset: CotDataset) -> bool:
        with self._lock:
            if token != self._issued:
                logger.info(f"[ingest] discarded stale load token={token} latest={self._issued}")
                return False
            self._current = dataset
            return True

    def run(self, location: str | None = None, settings: Settings | None = None) -> CotDataset | None:
        token = self.begin()
        dataset = self._loader(location, settings or self._settings)
        return dataset if self.commit(token, dataset) else None