"""Error taxonomy for loading COT data."""

from __future__ import annotations


class CotDataError(Exception):
    """Base class for every failure raised while loading COT data."""


class TransportError(CotDataError):
    """Raw table could not be fetched (network error, bad status, missing file)."""


class SchemaError(CotDataError, ValueError):
    """A required column could not be resolved from the header row."""


class DateParseError(CotDataError, ValueError):
    """A report date cell could not be parsed into a calendar date."""
