"""Main Streamlit app: COT non-commercial positions by symbol and date window."""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from src.app.components.cot_chart import build_cot_figure
from src.app.components.data_info import render_data_info
from src.app.ui_state import (
    get_selected_symbol,
    get_show_net,
    get_window,
    initialize_selection_defaults,
    load_dataset,
    render_sidebar,
    set_selected_symbol,
    set_show_net,
    set_window,
)
from src.common.config import load_settings
from src.common.errors import CotDataError
from src.common.paths import ProjectPaths

settings = load_settings(ProjectPaths(Path(".").resolve()))

# Configure page
st.set_page_config(
    page_title=settings.page_title,
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

source = render_sidebar(settings)

st.title(settings.page_title)

try:
    ds = load_dataset(source, settings)
except CotDataError as e:
    st.error(f"Error: {e}")
    st.stop()

if ds is None or len(ds) == 0:
    st.warning("No usable rows in the data source.")
    st.stop()

initialize_selection_defaults(ds)
symbols = ds.symbols()
bounds = ds.bounds()

col_symbol, col_net, col_dates = st.columns([4, 3, 5])

with col_symbol:
    current = get_selected_symbol()
    selected = st.selectbox(
        "Asset",
        options=symbols,
        index=symbols.index(current) if current in symbols else 0,
        help="Type to search and select the asset name.",
    )
    set_selected_symbol(selected)

with col_net:
    show_net = st.checkbox("Show Net Position", value=get_show_net(settings.default_show_net))
    set_show_net(show_net)

with col_dates:
    start, end = get_window()
    d1, d2 = st.columns(2)
    with d1:
        start = st.date_input("Start Date", value=start, min_value=bounds.start, max_value=bounds.end)
    with d2:
        end = st.date_input("End Date", value=end, min_value=bounds.start, max_value=bounds.end)
    set_window(start, end)

window = ds.window(selected, start, end)

fig = build_cot_figure(window, show_net=show_net)
if fig is None:
    st.info("No data available for the selected range.")
else:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

render_data_info(window, selected)

if ds.rows_rejected:
    st.caption(f"{ds.rows_rejected} malformed rows were skipped while loading.")
