"""Cinedb CLI entry points.

This module exposes commands for schema setup, the IMDB import, and reports.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import CinedbConfig
from core.constants import SUPPORTED_LOG_LEVELS
from core.errors import CinedbError
from core.logging_config import configure_logging
from core.types import ImportOptions, ReportOptions
from ingest.datasets import supported_dataset_names
from ingest.pipeline import render_import_summary
from report.generator import render_report_results
from store.database_sdk import CinedbClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="cinedb", description="IMDB movie database CLI")
    parser.add_argument("--data-dir", help="Override CINEDB_DATA_DIR for this command")
    parser.add_argument("--database", help="Override CINEDB_DATABASE for this command")
    parser.add_argument("--report-dir", help="Override CINEDB_REPORT_DIR for this command")
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override CINEDB_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_schema_command(subparsers)
    _add_import_command(subparsers)
    _add_report_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Cinedb CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args)
        if args.command == "schema":
            return _run_schema_command(client)
        if args.command == "import":
            return _run_import_command(client, args)
        if args.command == "report":
            return _run_report_command(client, args)
        if args.command == "run-spec":
            return run_run_spec_command(client, args)
    except CinedbError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> CinedbClient:
    """Build SDK client with optional path overrides and configure logging.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = CinedbConfig.from_env()
    configure_logging(args.log_level or config.log_level)
    return CinedbClient(config).with_paths(
        data_dir=args.data_dir,
        database=args.database,
        report_dir=args.report_dir,
    )


def _run_schema_command(client: CinedbClient) -> int:
    """Handle schema command.

    Args:
        client: SDK client.

    Returns:
        Exit code.
    """
    for table_name in client.initialize_schema():
        print(table_name)
    return 0


def _run_import_command(client: CinedbClient, args: argparse.Namespace) -> int:
    """Handle import command.

    Per-dataset summary lines go to stderr. With ``--strict`` a failed
    dataset makes the exit code non-zero.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    options = ImportOptions(dataset_names=tuple(args.dataset or ()), strict=args.strict)
    summary = client.import_datasets(options)
    for line in render_import_summary(summary):
        print(line, file=sys.stderr)
    if options.strict and summary.failed_count > 0:
        return 1
    return 0


def _run_report_command(client: CinedbClient, args: argparse.Namespace) -> int:
    """Handle report command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code, non-zero when any report failed.
    """
    defaults = client.default_report_options()
    options = ReportOptions(
        output_dir=defaults.output_dir,
        genre=args.genre or defaults.genre,
        limit=args.limit or defaults.limit,
    )
    results = client.generate_reports(options)
    for line in render_report_results(results):
        print(line)
    return 0 if all(result.status == "written" for result in results) else 1


def _add_schema_command(subparsers: Any) -> None:
    """Register schema subcommand."""
    subparsers.add_parser("schema", help="Create missing tables and list them")


def _add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import IMDB CSV files into the database")
    parser.add_argument(
        "--dataset",
        action="append",
        choices=supported_dataset_names(),
        help="Import only this dataset; repeat to select several",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any dataset could not be read",
    )


def _add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser("report", help="Write text reports from the database")
    parser.add_argument("--genre", help="Genre for the top movies report")
    parser.add_argument("--limit", type=_positive_int, help="Rows in the top movies report")


def _positive_int(raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{raw_value}'") from error
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value
