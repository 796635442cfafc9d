"""Read a census age-group CSV into text mappings.

The loader does no numeric conversion: every cell is returned as text and
the Aggregator decides how to read it. Any failure to obtain a usable table
is raised as `LoadFailure`.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd
import requests

from population_pyramid.models import EXPECTED_COLUMNS

log = logging.getLogger(__name__)


class LoadFailure(RuntimeError):
    """The data source could not be read or has none of the expected columns."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not load {source}: {reason}")
        self.source = source
        self.reason = reason


def is_remote(source: str) -> bool:
    """Return True when `source` is an http(s) URL."""
    return source.lower().startswith(("http://", "https://"))


def _fetch_text(url: str, timeout: float) -> str:
    """Download `url` and return its body as text.

    Raises:
        LoadFailure: on connection errors or non-2xx status codes.
    """
    log.info("Downloading %s", url)
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise LoadFailure(url, str(e)) from e
    log.info("Fetched %s (%d bytes)", url, len(r.content))
    return r.text


def _read_local(source: str) -> str:
    path = Path(source)
    if not path.is_file():
        raise LoadFailure(source, "file not found")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadFailure(source, str(e)) from e


def parse_csv_text(text: str, source: str = "<text>") -> list[dict[str, str]]:
    """Parse CSV text into a list of column → text mappings.

    Args:
        text: CSV content with a header row.
        source: Name used in log and error messages.

    Returns:
        Rows in file order, keyed by whitespace-trimmed column names.

    Raises:
        LoadFailure: if the text cannot be parsed or none of the expected
            columns is present.
    """
    try:
        pdf = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise LoadFailure(source, f"unreadable CSV ({e})") from e

    pdf.columns = [str(c).strip() for c in pdf.columns]

    present = [c for c in EXPECTED_COLUMNS if c in pdf.columns]
    if not present:
        raise LoadFailure(source, "none of the expected columns is present")

    missing = [c for c in EXPECTED_COLUMNS if c not in pdf.columns]
    if missing:
        log.warning("%s is missing columns %s; their cells read as 0", source, missing)

    log.info("Read %d rows from %s", len(pdf), source)
    return pdf.to_dict(orient="records")


def load_rows(source: str, timeout: float = 60) -> list[dict[str, str]]:
    """Load the census table named by `source`.

    Args:
        source: Local path or http(s) URL of the CSV.
        timeout: Request timeout in seconds for remote sources.

    Returns:
        Rows in file order as column → text mappings.

    Raises:
        LoadFailure: if the source is unreachable, unreadable or has no
            expected columns.
    """
    text = _fetch_text(source, timeout) if is_remote(source) else _read_local(source)
    return parse_csv_text(text, source)
