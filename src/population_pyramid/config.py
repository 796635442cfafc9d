"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the data source, default view and logging options from the
environment (optionally via a `.env` file at the project root).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

from population_pyramid.models import ViewKind

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for configuration read from the environment.

    Attributes:
        data_source: Path or http(s) URL of the census CSV.
        default_view: View selected when the dashboard starts.
        http_timeout: Timeout in seconds for remote CSV downloads.
        log_path: File the CLI writes its log to.
    """
    data_source: str
    default_view: ViewKind
    http_timeout: float
    log_path: Path



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `PYRAMID_DEFAULT_VIEW` or `PYRAMID_HTTP_TIMEOUT`
            holds an invalid value.
    """
    data_source = os.getenv(
        "PYRAMID_DATA_SOURCE",
        "data/census_age_india_only.csv",
    ).strip()
    raw_view = os.getenv("PYRAMID_DEFAULT_VIEW", "total")
    raw_timeout = os.getenv("PYRAMID_HTTP_TIMEOUT", "60")
    log_path = Path(os.getenv("PYRAMID_LOG_PATH", "logs/pyramid.log"))

    try:
        default_view = ViewKind.parse(raw_view)
    except ValueError as e:
        raise RuntimeError(
            f"PYRAMID_DEFAULT_VIEW must be one of total, rural, urban (got {raw_view!r})."
        ) from e

    try:
        http_timeout = float(raw_timeout)
    except ValueError as e:
        raise RuntimeError(
            f"PYRAMID_HTTP_TIMEOUT must be a number of seconds (got {raw_timeout!r})."
        ) from e
    if http_timeout <= 0:
        raise RuntimeError("PYRAMID_HTTP_TIMEOUT must be greater than zero.")

    return Settings(
        data_source=data_source,
        default_view=default_view,
        http_timeout=http_timeout,
        log_path=log_path,
    )
