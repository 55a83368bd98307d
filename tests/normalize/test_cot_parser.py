from __future__ import annotations

import pytest

from src.common.errors import SchemaError
from src.normalize.cot_parser import parse_cot_text


def test_keeps_cells_as_text_and_skips_blank_lines():
    parsed = parse_cot_text('date,symbol,long,short\n\n2024-01-05,"GOLD, COMEX",0100,\n')
    assert list(parsed.df["symbol"]) == ["GOLD, COMEX"]
    assert list(parsed.df["long"]) == ["0100"]
    assert list(parsed.df["short"]) == [""]


def test_strips_bom():
    parsed = parse_cot_text("\ufeffdate,symbol,long,short\n2024-01-05,GOLD,1,2\n")
    assert parsed.columns.date == "date"


def test_custom_delimiter():
    parsed = parse_cot_text("date;symbol;long;short\n2024-01-05;GOLD;1;2\n", delimiter=";")
    assert parsed.columns.symbol == "symbol"
    assert len(parsed.df) == 1


def test_empty_text_is_schema_error():
    with pytest.raises(SchemaError):
        parse_cot_text("")


def test_missing_columns_is_schema_error():
    with pytest.raises(SchemaError):
        parse_cot_text("date,symbol,long\n2024-01-05,GOLD,1\n")


def test_extra_fields_are_truncated_not_fatal():
    parsed = parse_cot_text(
        "date,symbol,long,short\n"
        "2024-01-05,GOLD,100,40\n"
        "2024-01-12,GOLD,90,50,EXTRA\n"
    )
    assert parsed.rows_truncated == 1
    assert list(parsed.df.columns) == ["date", "symbol", "long", "short"]
    assert parsed.df.iloc[1].tolist() == ["2024-01-12", "GOLD", "90", "50"]


def test_trailing_delimiter_keeps_columns_aligned():
    parsed = parse_cot_text(
        "date,symbol,long,short\n"
        "2024-01-05,GOLD,100,40,\n"
        "2024-01-12,GOLD,90,50,\n"
    )
    assert parsed.rows_truncated == 2
    assert list(parsed.df["date"]) == ["2024-01-05", "2024-01-12"]
    assert list(parsed.df["symbol"]) == ["GOLD", "GOLD"]
    assert list(parsed.df["short"]) == ["40", "50"]


def test_short_rows_are_padded():
    parsed = parse_cot_text("date,symbol,long,short\n2024-01-12,GOLD,90\n")
    assert parsed.rows_padded == 1
    assert parsed.df.iloc[0].tolist() == ["2024-01-12", "GOLD", "90", ""]


def test_blank_and_repeated_header_names():
    parsed = parse_cot_text("date,symbol,long,short,,long\n2024-01-05,GOLD,1,2,x,3\n")
    assert list(parsed.df.columns) == ["date", "symbol", "long", "short", "Unnamed: 4", "long.1"]
    assert parsed.columns.long == "long"
