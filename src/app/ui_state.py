"""UI state management for Streamlit app."""

from __future__ import annotations

from datetime import date

import streamlit as st

from src.common.config import Settings
from src.ingest.loader import CotDataset, LoadCoordinator, load


@st.cache_data(show_spinner="Loading COT data...", ttl=3600)
def _load_cached(location: str, timeout_s: int, retries: int, delimiter: str) -> CotDataset:
    """Load and normalize a source (cached per location)."""
    settings = Settings(source=location, timeout_s=timeout_s, retries=retries, delimiter=delimiter)
    return load(location, settings)


def get_coordinator() -> LoadCoordinator:
    """One coordinator per browser session so a stale load never replaces a newer one."""
    if "load_coordinator" not in st.session_state:
        st.session_state["load_coordinator"] = LoadCoordinator(
            loader=lambda loc, s: _load_cached(loc, s.timeout_s, s.retries, s.delimiter),
        )
    return st.session_state["load_coordinator"]


def load_dataset(location: str, settings: Settings) -> CotDataset | None:
    """Load `location`; falls back to the last committed dataset if this run was superseded."""
    coordinator = get_coordinator()
    ds = coordinator.run(location, settings)
    return ds if ds is not None else coordinator.current


def initialize_selection_defaults(ds: CotDataset) -> None:
    """Pick the first symbol and the latest report date whenever the source changes."""
    if st.session_state.get("loaded_source") == ds.source and "selected_symbol" in st.session_state:
        return

    st.session_state["loaded_source"] = ds.source
    symbols = ds.symbols()
    st.session_state["selected_symbol"] = symbols[0] if symbols else None

    latest = ds.latest()
    st.session_state["start_date"] = latest
    st.session_state["end_date"] = latest


def get_selected_symbol() -> str | None:
    return st.session_state.get("selected_symbol")


def set_selected_symbol(symbol: str) -> None:
    st.session_state["selected_symbol"] = symbol


def get_window() -> tuple[date | None, date | None]:
    return st.session_state.get("start_date"), st.session_state.get("end_date")


def set_window(start: date, end: date) -> None:
    st.session_state["start_date"] = start
    st.session_state["end_date"] = end


def get_show_net(default: bool = False) -> bool:
    return bool(st.session_state.get("show_net", default))


def set_show_net(value: bool) -> None:
    st.session_state["show_net"] = value


def render_sidebar(settings: Settings) -> str:
    """Render the data source box; returns the location to load."""
    with st.sidebar:
        st.header("Data source")
        location = st.text_input(
            "CSV URL or path",
            value=st.session_state.get("source_location", settings.source),
            key="sidebar_source_input",
            help="Defaults to COT_DATA_URL or configs/dashboard.yaml",
        )
        st.session_state["source_location"] = location.strip() or settings.source
        if st.button("Reload", use_container_width=True):
            _load_cached.clear()
    return st.session_state["source_location"]
