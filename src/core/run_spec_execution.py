"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative pipeline path without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from core.errors import CinedbIngestError, CinedbRunSpecError
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import (
    optional_bool,
    optional_string,
    optional_string_list,
    positive_int_with_default,
)
from core.types import ImportOptions, ImportSummary, ReportOptions, ReportResult
from ingest.pipeline import render_import_summary
from report.generator import render_report_results


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def with_paths(
        self,
        data_dir: str | None = None,
        database: str | None = None,
        report_dir: str | None = None,
    ) -> Any: ...

    def initialize_schema(self) -> tuple[str, ...]: ...

    def import_datasets(self, options: ImportOptions | None = None) -> ImportSummary: ...

    def generate_reports(
        self,
        options: ReportOptions | None = None,
    ) -> tuple[ReportResult, ...]: ...

    def default_report_options(self) -> ReportOptions: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient


_IMPORT_STEP_KEYS = {"datasets", "strict"}
_REPORT_STEP_KEYS = {"genre", "limit", "output_dir"}


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    defaults = spec.defaults
    execution_client = client.with_paths(
        data_dir=defaults.data_dir,
        database=defaults.database,
        report_dir=defaults.report_dir,
    )
    context = RunSpecExecutionContext(client=execution_client)
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "schema":
        return _execute_schema_step(context, step)
    if step.command == "import":
        return _execute_import_step(context, step)
    if step.command == "report":
        return _execute_report_step(context, step)
    raise CinedbRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_schema_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    _reject_unknown_args(step, set())
    tables = context.client.initialize_schema()
    return (f"tables={','.join(tables)}",)


def _execute_import_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    _reject_unknown_args(step, _IMPORT_STEP_KEYS)
    options = ImportOptions(
        dataset_names=optional_string_list(step.args, "datasets"),
        strict=optional_bool(step.args, "strict", default_value=False),
    )
    summary = context.client.import_datasets(options)
    if options.strict and summary.failed_count > 0:
        raise CinedbIngestError(
            f"Import step finished with {summary.failed_count} failed dataset(s): "
            + "; ".join(
                f"{result.dataset_name}: {result.error}"
                for result in summary.datasets
                if result.status == "failed"
            )
        )
    return render_import_summary(summary)


def _execute_report_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    _reject_unknown_args(step, _REPORT_STEP_KEYS)
    defaults = context.client.default_report_options()
    output_dir = optional_string(step.args, "output_dir")
    options = ReportOptions(
        output_dir=Path(output_dir).expanduser().resolve() if output_dir else defaults.output_dir,
        genre=optional_string(step.args, "genre") or defaults.genre,
        limit=positive_int_with_default(step.args, "limit", defaults.limit),
    )
    return render_report_results(context.client.generate_reports(options))


def _reject_unknown_args(step: RunSpecStep, allowed_keys: set[str]) -> None:
    unknown_keys = sorted(set(step.args) - allowed_keys)
    if unknown_keys:
        raise CinedbRunSpecError(
            f"Run-spec command '{step.command}' does not accept: {', '.join(unknown_keys)}."
        )
