from __future__ import annotations

import argparse
import html
import io
import re
from pathlib import Path
from typing import Sequence

import pandas as pd
import matplotlib
matplotlib.use("Agg")  # deterministic, no GUI backend
import matplotlib.pyplot as plt

from src.common.config import load_settings
from src.common.errors import CotDataError
from src.common.logging import setup_logging
from src.common.paths import ProjectPaths
from src.compute.queries import records_to_frame
from src.ingest.loader import load
from src.normalize.records import CotRecord
from src.report.render import b64_png, load_template, render_report

LONG_COLOR = "#10b981"
SHORT_COLOR = "#ef4444"
NET_COLOR = "#6b7280"


def _format_int(x) -> str:
    if pd.isna(x):
        return "—"
    return f"{int(x):,}"


def _format_signed(x) -> str:
    if pd.isna(x):
        return "—"
    return f"{int(x):+,}"


def make_positions_chart_png(records: Sequence[CotRecord], symbol: str, show_net: bool = False) -> bytes:
    """
    Two panels: long/short (and optionally net) lines on top, ΔLong and inverted
    ΔShort bars below. Fixed size and dpi so output is deterministic.
    """
    df = records_to_frame(records)

    plt.close("all")
    fig, (ax_pos, ax_chg) = plt.subplots(
        2, 1, figsize=(8.8, 4.6), dpi=140, sharex=True,
        gridspec_kw={"height_ratios": [0.65, 0.35]},
    )

    ax_pos.plot(df["date"], df["long"], color=LONG_COLOR, linewidth=2.0, label="Long")
    ax_pos.plot(df["date"], df["short"], color=SHORT_COLOR, linewidth=2.0, label="Short")
    if show_net:
        ax_pos.plot(df["date"], df["net"], color=NET_COLOR, linewidth=1.0, linestyle=":", label="Net")
    ax_pos.set_title(f"{symbol} — Non-Commercial positions", fontsize=10)
    ax_pos.set_ylabel("Contracts", fontsize=9)
    ax_pos.legend(loc="upper left", fontsize=8, frameon=False, ncol=3)
    ax_pos.grid(True, alpha=0.25)

    # covering shorts reads as positive
    width = 5
    ax_chg.bar(df["date"], df["d_long"], width=width, color=LONG_COLOR, alpha=0.7)
    ax_chg.bar(df["date"], -df["d_short"], width=width, color=SHORT_COLOR, alpha=0.7)
    ax_chg.axhline(0, color="#9ca3af", linewidth=0.8)
    ax_chg.set_ylabel("Δ / −ΔShort", fontsize=9)
    ax_chg.grid(True, alpha=0.25)

    for ax in (ax_pos, ax_chg):
        ax.tick_params(axis="both", labelsize=8)
    fig.autofmt_xdate(rotation=0)

    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, format="png", bbox_inches="tight")
    plt.close(fig)
    return buf.getvalue()


def _key_numbers_table_html(last: CotRecord) -> str:
    return f"""
      <table>
        <tr><td>Report date</td><td><b>{last.date.isoformat()}</b></td></tr>
        <tr><td>Long</td><td>{_format_int(last.long)} ({_format_signed(last.d_long)})</td></tr>
        <tr><td>Short</td><td>{_format_int(last.short)} ({_format_signed(last.d_short)})</td></tr>
        <tr><td>Net</td><td><b>{_format_signed(last.net)}</b> ({_format_signed(last.d_net)})</td></tr>
      </table>
    """.strip()


def build_report_html(records: Sequence[CotRecord], symbol: str, show_net: bool = False) -> str:
    if not records:
        raise ValueError(f"No data for symbol={symbol} in the selected window")

    png = make_positions_chart_png(records, symbol, show_net=show_net)
    chart_html = (
        f'<img alt="Positions chart for {html.escape(symbol)}" '
        f'src="data:image/png;base64,{b64_png(png)}" />'
    )
    window = (
        f"Showing {len(records)} data points, "
        f"{records[0].date:%b %d, %Y} to {records[-1].date:%b %d, %Y}"
    )
    return render_report(
        load_template(),
        symbol=html.escape(symbol),
        window=window,
        key_numbers_html=_key_numbers_table_html(records[-1]),
        chart_html=chart_html,
    )


def _slug(symbol: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", symbol).strip("_") or "symbol"


def main(argv: list[str] | None = None) -> Path:
    p = argparse.ArgumentParser(description="Render a static COT positions report for one symbol")
    p.add_argument("--root", default=".", help="project root")
    p.add_argument("--symbol", required=True)
    p.add_argument("--start", default=None, help="YYYY-MM-DD (default: first report)")
    p.add_argument("--end", default=None, help="YYYY-MM-DD (default: latest report)")
    p.add_argument("--source", default=None, help="URL or path (overrides config / COT_DATA_URL)")
    p.add_argument("--show-net", action="store_true")
    p.add_argument("--out", default=None, help="output HTML path")
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args(argv)

    logger = setup_logging(args.log_level)
    paths = ProjectPaths(Path(args.root).resolve())
    settings = load_settings(paths)

    try:
        ds = load(args.source, settings)
    except CotDataError as e:
        logger.error(f"[report] load failed: {e}")
        raise SystemExit(f"Failed to load data: {e}")

    if args.symbol not in ds.symbols():
        raise SystemExit(f"Unknown symbol: {args.symbol}")

    sym_records = [r for r in ds.records if r.symbol == args.symbol]
    start = args.start or sym_records[0].date
    end = args.end or sym_records[-1].date
    try:
        window = ds.window(args.symbol, start, end)
    except CotDataError as e:
        logger.error(f"[report] bad date window: {e}")
        raise SystemExit(f"Invalid date window: {e}")
    if not window:
        raise SystemExit(f"No data for {args.symbol} between {start} and {end}")

    html_text = build_report_html(window, args.symbol, show_net=args.show_net)

    out_path = Path(args.out) if args.out else (
        paths.reports / _slug(args.symbol) / f"{_slug(args.symbol)}_{window[-1].date.isoformat()}.html"
    )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_text, encoding="utf-8")
    logger.info(f"[report] wrote {out_path} points={len(window)}")
    return out_path


if __name__ == "__main__":
    path = main()
    print(f"OK: wrote {path}")
