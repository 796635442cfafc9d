"""Utilities to configure consistent logging for the CLI and dashboard."""

from __future__ import annotations

import logging
import sys
from typing import TextIO
from pathlib import Path

NOISY_LOGGERS = ("urllib3", "altair", "matplotlib")


def configure_logging(
    log_path: Path | None = None,
    level: int | str = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure root logging handlers and formatting.

    Calling this again replaces the handlers installed by a previous call,
    which matters for Streamlit where the script body runs on every rerun.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level, as a number or a name such as ``"DEBUG"``.
        stream: Console stream (defaults to stdout).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
