"""Command-line interface for exporting pyramid chart data.

Provides subcommands: `build` (one view) and `all` (every view). Each command
is implemented as a `cmd_*` function that accepts an argparse namespace and
returns a process exit status.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from population_pyramid.config import get_settings
from population_pyramid.controller import ViewController
from population_pyramid.ingest.load_csv import load_rows
from population_pyramid.logging_config import configure_logging
from population_pyramid.models import ViewKind
from population_pyramid.render.chartjs import to_chartjs_data

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _controller_for(source: str, timeout: float) -> ViewController | None:
    """Return a controller with `source` loaded, or None if loading failed."""
    controller = ViewController(loader=lambda s: load_rows(s, timeout=timeout))
    if not controller.load(source):
        return None
    return controller


def _write_json(payload: Any, output: Path | None) -> None:
    text = json.dumps(payload, indent=2)
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    log.info("Wrote %s", output)


# --------------------------------------------------
# BUILD
# --------------------------------------------------
def cmd_build(args: argparse.Namespace) -> int:
    """Write the Chart.js data for `args.view`.

    Args:
        args: argparse namespace with `source`, `view`, `output`, `timeout`.
    """
    controller = _controller_for(args.source, args.timeout)
    if controller is None:
        return 1

    controller.set_view(args.view)
    model = controller.state.model
    if model is None:
        return 1
    _write_json(to_chartjs_data(model), args.output)
    return 0


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> int:
    """Write Chart.js data for every view, keyed by view name."""
    controller = _controller_for(args.source, args.timeout)
    if controller is None:
        return 1

    payload: dict[str, Any] = {}
    for view in ViewKind:
        controller.set_view(view)
        model = controller.state.model
        if model is None:
            return 1
        payload[view.value] = to_chartjs_data(model)

    _write_json(payload, args.output)
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Defaults for source, view and timeout come from `get_settings()`.
    """
    s = get_settings()
    p = argparse.ArgumentParser(prog="population-pyramid")
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--source", default=s.data_source)
    common.add_argument("--output", type=Path, default=None)
    common.add_argument("--timeout", type=float, default=s.http_timeout)

    p_build = sub.add_parser("build", parents=[common])
    p_build.add_argument(
        "--view",
        type=ViewKind.parse,
        choices=list(ViewKind),
        metavar="{total,rural,urban}",
        default=s.default_view,
    )

    sub.add_parser("all", parents=[common])
    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    s = get_settings()
    configure_logging(s.log_path, stream=sys.stderr)

    args = build_parser().parse_args(argv)

    if args.cmd == "build":
        return cmd_build(args)
    if args.cmd == "all":
        return cmd_all(args)
    raise SystemExit(2)


if __name__ == "__main__":
    raise SystemExit(main())
