"""COT chart component: long/short lines over ΔLong / −ΔShort bars."""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.compute.queries import records_to_frame
from src.normalize.records import CotRecord

LONG_COLOR = "#10b981"
SHORT_COLOR = "#ef4444"
NET_COLOR = "#6b7280"
DATE_FORMAT = "%m/%d/%Y"

UNIFIED_HOVER = (
    "<b>%{x|" + DATE_FORMAT + "}</b><br>"
    f"<span style='color:{LONG_COLOR}'>● Long</span>: %{{customdata[0]:,}} &nbsp;&nbsp;"
    f"<span style='color:{SHORT_COLOR}'>● Short</span>: %{{customdata[1]:,}}<br>"
    "Net: %{customdata[2]:+,}<br>"
    f"<span style='color:{LONG_COLOR}'>ΔLong</span>: %{{customdata[3]:+,}} &nbsp;&nbsp;"
    f"<span style='color:{SHORT_COLOR}'>ΔShort</span>: %{{customdata[4]:+,}}<br>"
    "ΔNet: %{customdata[5]:+,}<extra></extra>"
)


def build_cot_figure(records: Sequence[CotRecord], show_net: bool = False) -> go.Figure | None:
    """
    Build the two-panel figure for one symbol window.

    Returns None when there is nothing to plot.
    """
    if not records:
        return None

    df = records_to_frame(records)
    custom = df[["long", "short", "net", "d_long", "d_short", "d_net"]].to_numpy()

    fig = make_subplots(
        rows=2, cols=1, shared_xaxes=True,
        row_heights=[0.65, 0.35], vertical_spacing=0.04,
    )

    # Invisible hover carrier so one tooltip shows every number
    fig.add_trace(go.Scatter(
        x=df["date"], y=df["long"], mode="lines",
        line=dict(color="rgba(0,0,0,0)", width=0),
        customdata=custom, hovertemplate=UNIFIED_HOVER, showlegend=False,
    ), row=1, col=1)

    fig.add_trace(go.Scatter(
        x=df["date"], y=df["long"], mode="lines", name="Long",
        line=dict(color=LONG_COLOR, width=2), hoverinfo="skip",
    ), row=1, col=1)
    fig.add_trace(go.Scatter(
        x=df["date"], y=df["short"], mode="lines", name="Short",
        line=dict(color=SHORT_COLOR, width=2), hoverinfo="skip",
    ), row=1, col=1)

    if show_net:
        fig.add_trace(go.Scatter(
            x=df["date"], y=df["net"], mode="lines", name="Net",
            line=dict(color=NET_COLOR, width=1, dash="dot"), hoverinfo="skip",
        ), row=1, col=1)

    # Inverted ΔShort: covering shorts plots as positive
    fig.add_trace(go.Bar(
        x=df["date"], y=df["d_long"], name="ΔLong",
        marker=dict(color=LONG_COLOR, opacity=0.7), hoverinfo="skip", showlegend=False,
    ), row=2, col=1)
    fig.add_trace(go.Bar(
        x=df["date"], y=-df["d_short"], name="−ΔShort",
        marker=dict(color=SHORT_COLOR, opacity=0.7), hoverinfo="skip", showlegend=False,
    ), row=2, col=1)

    fig.update_layout(
        margin=dict(l=50, r=20, t=40, b=40),
        barmode="relative",
        hovermode="x unified",
        height=620,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0,
                    bgcolor="rgba(0,0,0,0)"),
    )
    fig.update_yaxes(title_text="Contracts", tickformat=",", row=1, col=1)
    fig.update_yaxes(title_text="Δ / −ΔShort", tickformat=",", row=2, col=1)
    fig.update_xaxes(tickformat=DATE_FORMAT, row=2, col=1)
    return fig
