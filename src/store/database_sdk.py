"""Python SDK for movie database operations.

This module exposes high-level APIs for schema setup, the IMDB import,
and report generation, each owning its store handle for one call.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import CinedbConfig
from core.run_spec_execution import execute_run_spec_file
from core.types import ImportOptions, ImportSummary, ReportOptions, ReportResult
from ingest.pipeline import run_import
from report.generator import run_reports
from store.movie_store import MovieStore
from store.schema import initialize_schema, list_tables


class CinedbClient:
    """Primary SDK entry point for import and report workflows."""

    def __init__(self, config: CinedbConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or CinedbConfig.from_env()

    @property
    def config(self) -> CinedbConfig:
        """Return the runtime configuration used by this client."""
        return self._config

    def with_paths(
        self,
        data_dir: str | None = None,
        database: str | None = None,
        report_dir: str | None = None,
    ) -> "CinedbClient":
        """Return a client with selected paths overridden.

        A new data directory without an explicit database keeps the
        current database path.
        """
        config = self._config
        if data_dir:
            config = replace(config, data_dir=_resolve(data_dir))
        if database:
            config = replace(config, database_path=_resolve(database))
        if report_dir:
            config = replace(config, report_dir=_resolve(report_dir))
        return CinedbClient(config)

    def initialize_schema(self) -> tuple[str, ...]:
        """Create missing relations and return the tables now present.

        Raises:
            CinedbStoreError: If the store cannot be opened or initialized.
        """
        with MovieStore.open(self._config.database_path) as store:
            initialize_schema(store)
            return list_tables(store)

    def import_datasets(self, options: ImportOptions | None = None) -> ImportSummary:
        """Import the IMDB source files into the store.

        Args:
            options: Optional dataset selection.

        Returns:
            Per-dataset counters.

        Raises:
            CinedbStoreError: If the store cannot be opened or initialized.
            CinedbConfigError: If a requested dataset name is unknown.
        """
        return run_import(self._config, options)

    def generate_reports(self, options: ReportOptions | None = None) -> tuple[ReportResult, ...]:
        """Write the text reports from a populated store.

        Args:
            options: Optional output directory and top-movies parameters.

        Returns:
            One result per report.

        Raises:
            CinedbStoreError: If the database cannot be opened read-only.
        """
        return run_reports(self._config, options or self.default_report_options())

    def default_report_options(self) -> ReportOptions:
        """Build report options from configuration defaults."""
        return ReportOptions(
            output_dir=self._config.report_dir,
            genre=self._config.report_genre,
            limit=self._config.report_limit,
        )

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec and return printable output lines."""
        return execute_run_spec_file(self, spec_file)


def _resolve(raw_path: str) -> Path:
    return Path(raw_path).expanduser().resolve()
