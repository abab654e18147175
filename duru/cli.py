"""Command line entry point: scan a directory and list its largest files."""

from __future__ import annotations

import argparse
import logging

from result import Err
from rich.console import Console

from duru.config.defaults import default_config
from duru.config.loader import load_config, sample_config_json
from duru.config.schema import AppConfig
from duru.log import configure_logging
from duru.models.enums import ErrorPolicy, SortOrder
from duru.models.scan import ScanError
from duru.scan import create_builder
from duru.services.flatten import file_list
from duru.services.report import render_report, render_summary

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        msg = f"invalid integer: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number < 0:
        msg = f"must be 0 or more, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _positive_int(value: str) -> int:
    number = _non_negative_int(value)
    if number < 1:
        msg = "must be 1 or more"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="duru",
        description="List the largest files below a directory.",
    )
    p.add_argument("-p", "--path", help="Root directory to scan.")
    p.add_argument(
        "-n",
        "--head",
        type=_non_negative_int,
        default=None,
        help="Number of files to show (default: 20).",
    )
    p.add_argument("-f", "--full", action="store_true", help="Show full paths instead of file names.")
    p.add_argument("-a", "--ascending", action="store_true", help="Show the smallest files first.")
    p.add_argument(
        "-w",
        "--workers",
        type=_positive_int,
        default=None,
        help="Scan sibling directories on N threads (default: 1).",
    )
    p.add_argument(
        "--skip-errors",
        action="store_true",
        help="Skip unreadable directories instead of aborting the scan.",
    )
    p.add_argument("--summary", action="store_true", help="Print scan statistics after the listing.")
    p.add_argument("--config", default=None, help="Path to a JSON config file.")
    p.add_argument("--sample-config", action="store_true", help="Print the default config and exit.")
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return p


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    loaded = load_config(args.config)
    if isinstance(loaded, Err):
        logger.warning("%s Using defaults.", loaded.err_value)
        config = default_config()
    else:
        config = loaded.ok_value

    if args.head is not None:
        config.head_count = args.head
    if args.workers is not None:
        config.scan_workers = args.workers
    if args.full:
        config.full_path = True
    if args.skip_errors:
        config.on_error = ErrorPolicy.SKIP
    return config


def _fail(error: ScanError) -> int:
    logger.error("%s: %s", error.message, error.path)
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug)

    if args.sample_config:
        print(sample_config_json())
        return 0
    if not args.path:
        parser.error("the following arguments are required: -p/--path")

    config = _resolve_config(args)
    logger.debug("Resolved config: %s", config.to_dict())

    builder = create_builder(workers=config.scan_workers, policy=config.on_error)
    built = builder.build(args.path)
    if isinstance(built, Err):
        return _fail(built.err_value)
    snapshot = built.ok_value

    flattened = file_list(snapshot.root)
    if isinstance(flattened, Err):
        return _fail(flattened.err_value)
    files = flattened.ok_value

    files.sort_by_size(SortOrder.ASCENDING if args.ascending else SortOrder.DESCENDING)
    top = files.head(config.head_count)

    console = Console()
    render_report(console, top, full_path=config.full_path)
    if args.summary:
        render_summary(console, snapshot, files)

    logger.debug("Listed %d of %d files under %s", len(top), len(files), snapshot.root.path)
    return 0
