from __future__ import annotations

import math
from datetime import date

import pandas as pd

from src.normalize.column_map import resolve_columns
from src.normalize.rows import coerce_number, normalize_rows


def _raw(rows, columns):
    return pd.DataFrame(rows, columns=columns)


def test_coerce_number_zero_fills():
    out = coerce_number(pd.Series(["12", " 7.5 ", "", "abc", None, "1,234", "inf"]))
    assert out.tolist() == [12.0, 7.5, 0.0, 0.0, 0.0, 0.0, 0.0]


def test_rejects_bad_date_and_missing_symbol():
    columns = ["date", "symbol", "long", "short"]
    raw = _raw(
        [
            ["2024-01-05", "GOLD", "100", "40"],
            ["not-a-date", "GOLD", "1", "1"],
            ["", "GOLD", "1", "1"],
            ["2024-01-05", "   ", "1", "1"],
            ["2024-01-05", None, "1", "1"],
        ],
        columns,
    )
    res = normalize_rows(raw, resolve_columns(columns))
    assert res.rows_read == 5
    assert res.rows_rejected == 4
    assert res.frame["symbol"].tolist() == ["GOLD"]
    assert res.frame["date"].tolist() == [date(2024, 1, 5)]


def test_garbled_numbers_keep_the_row():
    columns = ["date", "symbol", "long", "short"]
    raw = _raw([["2024-01-05", " GOLD ", "n/a", "40"]], columns)
    res = normalize_rows(raw, resolve_columns(columns))
    row = res.frame.iloc[0]
    assert row["symbol"] == "GOLD"
    assert row["long"] == 0.0
    assert row["short"] == 40.0
    assert row["net"] == -40.0


def test_deltas_left_unset_without_both_columns():
    columns = ["date", "symbol", "long", "short", "d_long"]
    raw = _raw([["2024-01-05", "GOLD", "100", "40", "5"]], columns)
    res = normalize_rows(raw, resolve_columns(columns))
    assert math.isnan(res.frame.iloc[0]["d_long"])
    assert math.isnan(res.frame.iloc[0]["d_short"])


def test_sourced_deltas_are_coerced():
    columns = ["date", "symbol", "long", "short", "d_long", "d_short"]
    raw = _raw([["2024-01-05", "GOLD", "100", "40", "5", "oops"]], columns)
    res = normalize_rows(raw, resolve_columns(columns))
    assert res.frame.iloc[0]["d_long"] == 5.0
    assert res.frame.iloc[0]["d_short"] == 0.0


def test_empty_table():
    columns = ["date", "symbol", "long", "short"]
    res = normalize_rows(_raw([], columns), resolve_columns(columns))
    assert res.rows_read == 0
    assert res.rows_rejected == 0
    assert res.frame.empty
