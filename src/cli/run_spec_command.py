"""Run-spec CLI command.

Registers ``cinedb run-spec``, which chains schema, import, and report
steps from one YAML file through the SDK client.
"""

from __future__ import annotations

import argparse
from typing import Any

from store.database_sdk import CinedbClient


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run schema, import, and report steps listed in a YAML file",
        description=(
            "Execute a version 1 run-spec. Optional 'defaults' set data_dir, "
            "database, and report_dir for every step."
        ),
    )
    parser.add_argument("spec_file", help="YAML file with 'version' and 'steps'")


def run_run_spec_command(client: CinedbClient, args: argparse.Namespace) -> int:
    """Print each step's summary lines to stdout.

    Step failures surface as CinedbError and are handled by ``main``.
    """
    for line in client.run_spec(args.spec_file):
        print(line)
    return 0
