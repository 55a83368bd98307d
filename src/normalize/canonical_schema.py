"""Schema definition for the normalized positions dataset."""

from __future__ import annotations

# Semantic field -> accepted header aliases (lowercase), tried in order.
# Official CFTC export names come first, then legacy annual.txt spellings, then short aliases.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "date": (
        "report_date_as_yyyy_mm_dd",
        "as of date in form yyyy-mm-dd",
        "report_date",
        "date",
    ),
    "symbol": (
        "contract_market_name",
        "market_and_exchange_names",
        "market and exchange names",
        "symbol",
        "market",
        "asset",
    ),
    "long": (
        "noncomm_positions_long_all",
        "noncommercial positions-long (all)",
        "long",
        "noncom_long",
    ),
    "short": (
        "noncomm_positions_short_all",
        "noncommercial positions-short (all)",
        "short",
        "noncom_short",
    ),
    "d_long": (
        "change_in_noncomm_long_all",
        "change in noncommercial-long (all)",
        "d_long",
    ),
    "d_short": (
        "change_in_noncomm_short_all",
        "change in noncommercial-short (all)",
        "d_short",
    ),
}

REQUIRED_FIELDS = ["date", "symbol", "long", "short"]
DELTA_FIELDS = ["d_long", "d_short"]

# Normalized frame / record columns, in order
POSITION_COLUMNS = [
    "date",
    "symbol",
    "long",
    "short",
    "d_long",
    "d_short",
    "net",
    "d_net",
]
