from __future__ import annotations
from dataclasses import dataclass
from io import StringIO
import csv
import logging

import pandas as pd

from src.common.errors import SchemaError
from src.normalize.column_map import ColumnMap, resolve_columns

logger = logging.getLogger("cot_dashboard")


@dataclass(frozen=True)
class ParsedTable:
    df: pd.DataFrame
    columns: ColumnMap
    rows_padded: int = 0
    rows_truncated: int = 0


def _is_blank(row: list[str]) -> bool:
    return not row or all(not cell.strip() for cell in row)


def _header_names(row: list[str]) -> list[str]:
    """Blank names become "Unnamed: i"; repeated names get ".1", ".2", ... suffixes."""
    names: list[str] = []
    seen: dict[str, int] = {}
    for i, name in enumerate(row):
        if not name.strip():
            name = f"Unnamed: {i}"
        n = seen.get(name, 0)
        seen[name] = n + 1
        names.append(name if n == 0 else f"{name}.{n}")
    return names


def parse_cot_text(text: str, delimiter: str = ",") -> ParsedTable:
    """
    Parse raw CSV text into an all-text DataFrame and resolve its columns.

    Every cell is kept as a string (no dtype inference); typed coercion happens
    in src.normalize.rows. Blank lines are skipped, quoted values are honoured.
    Row width is enforced against the header: short rows are padded with "",
    long rows (including a trailing delimiter) are truncated. A ragged row never
    fails the table.
    Raises SchemaError when the table has no header or lacks required columns.
    """
    text = text.lstrip("\ufeff")
    reader = csv.reader(StringIO(text, newline=""), delimiter=delimiter)

    header: list[str] | None = None
    rows: list[list[str]] = []
    padded = truncated = 0
    try:
        for row in reader:
            if _is_blank(row):
                continue
            if header is None:
                header = _header_names(row)
                continue

            width = len(header)
            if len(row) < width:
                padded += 1
                row = row + [""] * (width - len(row))
            elif len(row) > width:
                truncated += 1
                row = row[:width]
            rows.append(row)
    except csv.Error as e:
        raise SchemaError(f"Source table could not be parsed: {e}") from e

    if header is None:
        raise SchemaError("Source table is empty (no header row)")

    if padded or truncated:
        logger.debug(f"[normalize] row width: padded={padded} truncated={truncated} expected={len(header)}")

    df = pd.DataFrame(rows, columns=header, dtype=object)
    columns = resolve_columns(df.columns)
    return ParsedTable(df=df, columns=columns, rows_padded=padded, rows_truncated=truncated)
