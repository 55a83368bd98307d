from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
import logging

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.common.errors import TransportError

logger = logging.getLogger("cot_dashboard")


@dataclass(frozen=True)
class FetchResult:
    location: str
    text: str
    size_bytes: int
    fetched_at_utc: str


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def decode_text(raw: bytes) -> str:
    # utf-8-sig strips a leading BOM if present
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise TransportError(f"Source is not valid UTF-8: {e}") from e


def _get(url: str, timeout_s: int) -> bytes:
    r = requests.get(url, timeout=timeout_s)
    r.raise_for_status()
    return r.content


def fetch_text(location: str, timeout_s: int = 60, attempts: int = 3) -> FetchResult:
    """
    Fetch the raw CSV text from a URL or a local path.

    Connection errors and timeouts are retried (exponential backoff, `attempts` tries);
    HTTP status errors fail immediately. Every failure surfaces as TransportError.
    """
    location = str(location).strip()
    if not location:
        raise TransportError("No data source configured")

    if is_url(location):
        retrying = Retrying(
            stop=stop_after_attempt(max(1, attempts)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            reraise=True,
        )
        try:
            raw = retrying(_get, location, timeout_s)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise TransportError(f"HTTP error! status: {status}") from e
        except requests.RequestException as e:
            raise TransportError(f"Failed to load data: {e}") from e
    else:
        path = Path(location).expanduser()
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise TransportError(f"Failed to load data: {e}") from e

    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    logger.info(f"[ingest] fetched {location} bytes={len(raw)}")
    return FetchResult(location=location, text=decode_text(raw), size_bytes=len(raw), fetched_at_utc=ts)
