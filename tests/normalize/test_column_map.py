from __future__ import annotations

import pytest

from src.common.errors import SchemaError
from src.normalize.column_map import resolve_columns


def test_official_export_headers():
    cols = resolve_columns([
        "Market_and_Exchange_Names",
        "Report_Date_as_YYYY_MM_DD",
        "CONTRACT_MARKET_NAME",
        "NonComm_Positions_Long_All",
        "NonComm_Positions_Short_All",
        "Change_in_NonComm_Long_All",
        "Change_in_NonComm_Short_All",
    ])
    assert cols.date == "Report_Date_as_YYYY_MM_DD"
    # canonical contract name outranks the market+exchange alias
    assert cols.symbol == "CONTRACT_MARKET_NAME"
    assert cols.long == "NonComm_Positions_Long_All"
    assert cols.d_short == "Change_in_NonComm_Short_All"
    assert cols.has_deltas


def test_short_aliases_case_insensitive():
    cols = resolve_columns(["DATE", "Asset", "Long", "SHORT"])
    assert (cols.date, cols.symbol, cols.long, cols.short) == ("DATE", "Asset", "Long", "SHORT")
    assert cols.d_long is None and cols.d_short is None
    assert not cols.has_deltas


def test_legacy_annual_txt_headers():
    cols = resolve_columns([
        "Market and Exchange Names",
        "As of Date in Form YYYY-MM-DD",
        "Noncommercial Positions-Long (All)",
        "Noncommercial Positions-Short (All)",
        " Change in Noncommercial-Long (All)",
        "Change in Noncommercial-Short (All)",
    ])
    assert cols.symbol == "Market and Exchange Names"
    assert cols.date == "As of Date in Form YYYY-MM-DD"
    assert cols.d_long == " Change in Noncommercial-Long (All)"
    assert cols.has_deltas


def test_alias_priority_over_header_order():
    cols = resolve_columns(["date", "report_date", "symbol", "long", "short"])
    assert cols.date == "report_date"


def test_one_delta_column_is_not_enough():
    cols = resolve_columns(["date", "symbol", "long", "short", "d_long"])
    assert cols.d_long == "d_long"
    assert cols.d_short is None
    assert not cols.has_deltas


def test_missing_required_column():
    with pytest.raises(SchemaError) as exc:
        resolve_columns(["date", "symbol", "long"])
    assert "short" in str(exc.value)
