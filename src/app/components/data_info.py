"""Data info component: point count and date span of the plotted window."""

from __future__ import annotations

from typing import Sequence

import streamlit as st

from src.normalize.records import CotRecord


def describe_window(records: Sequence[CotRecord], symbol: str) -> list[str]:
    if not records:
        return []
    return [
        f"Showing {len(records)} data points for {symbol}",
        f"Date range: {records[0].date:%b %d, %Y} to {records[-1].date:%b %d, %Y}",
    ]


def render_data_info(records: Sequence[CotRecord], symbol: str) -> None:
    for line in describe_window(records, symbol):
        st.caption(line)
