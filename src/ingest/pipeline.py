"""Import orchestration for the IMDB datasets.

This module drives read, transform, and insert for each dataset and
collects per-dataset counters. Row errors are counted and skipped,
dataset errors are recorded and the loop moves on, and only store
errors abort the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from core.config import CinedbConfig
from core.constants import DEFAULT_SOURCE_ENCODING
from core.errors import CinedbIngestError, CinedbTransformError
from core.logging_config import get_logger
from core.types import DatasetResult, DatasetSpec, ImportOptions, ImportSummary, RawRow
from ingest.datasets import select_datasets
from ingest.insert_executor import execute_insert
from ingest.row_reader import iter_raw_rows
from store.movie_store import MovieStore
from store.schema import initialize_schema

_LOGGER = get_logger(__name__)


class DatasetImporter:
    """Stateful importer for one dataset into an open store."""

    def __init__(
        self,
        store: MovieStore,
        spec: DatasetSpec,
        source_dir: Path,
        encoding: str = DEFAULT_SOURCE_ENCODING,
    ) -> None:
        self._store = store
        self._spec = spec
        self._source_path = source_dir / spec.file_name
        self._encoding = encoding
        self._result = DatasetResult(
            dataset_name=spec.name,
            source_path=str(self._source_path),
        )

    def run(self) -> DatasetResult:
        """Import every row of the dataset and return its counters."""
        _LOGGER.info(
            "dataset_import_started",
            dataset_name=self._spec.name,
            source_path=str(self._source_path),
            table=self._spec.table,
        )
        try:
            for raw_row in iter_raw_rows(self._source_path, self._encoding):
                self._process_row(raw_row)
        except CinedbIngestError as error:
            self._result.status = "failed"
            self._result.error = str(error)
            _LOGGER.error(
                "dataset_import_failed",
                dataset_name=self._spec.name,
                source_path=str(self._source_path),
                rows_read=self._result.rows_read,
                error=str(error),
            )
            return self._result
        _log_dataset_completion(self._result)
        return self._result

    def _process_row(self, raw_row: RawRow) -> None:
        self._result.rows_read += 1
        if raw_row.is_malformed:
            self._result.malformed += 1
            _LOGGER.warning(
                "row_malformed",
                dataset_name=self._spec.name,
                line_number=raw_row.line_number,
                error=raw_row.error,
            )
            return
        if len(raw_row.fields) < self._spec.min_columns:
            self._result.short += 1
            return
        try:
            typed_row = self._spec.transform(raw_row.fields)
        except CinedbTransformError as error:
            self._result.transform_failed += 1
            _LOGGER.debug(
                "row_transform_failed",
                dataset_name=self._spec.name,
                line_number=raw_row.line_number,
                error=str(error),
            )
            return
        outcome = execute_insert(self._store, self._spec.insert_statement, typed_row)
        if outcome == "inserted":
            self._result.inserted += 1
        elif outcome == "duplicate":
            self._result.duplicates += 1
        else:
            self._result.insert_failed += 1


def import_dataset(
    store: MovieStore,
    spec: DatasetSpec,
    source_dir: Path,
    encoding: str = DEFAULT_SOURCE_ENCODING,
) -> DatasetResult:
    """Import one dataset into an open store.

    Args:
        store: Open writable store with the schema initialized.
        spec: Dataset configuration record.
        source_dir: Directory holding the dataset file.
        encoding: Source text encoding.

    Returns:
        Dataset counters; status is ``failed`` when the file could not be read.
    """
    return DatasetImporter(store, spec, source_dir, encoding).run()


def import_datasets(
    store: MovieStore,
    source_dir: Path,
    dataset_names: Iterable[str] = (),
    encoding: str = DEFAULT_SOURCE_ENCODING,
) -> ImportSummary:
    """Import the selected datasets in registry order.

    Args:
        store: Open writable store with the schema initialized.
        source_dir: Directory holding the dataset files.
        dataset_names: Optional subset of dataset names.
        encoding: Source text encoding.

    Returns:
        Summary with one result per attempted dataset.

    Raises:
        CinedbConfigError: If a requested dataset name is unknown.
    """
    results = [
        import_dataset(store, spec, source_dir, encoding)
        for spec in select_datasets(dataset_names)
    ]
    summary = ImportSummary(database_path=str(store.database_path), datasets=tuple(results))
    _LOGGER.info(
        "import_completed",
        database_path=summary.database_path,
        dataset_count=len(summary.datasets),
        failed_count=summary.failed_count,
        inserted_count=summary.inserted_count,
        skipped_count=summary.skipped_count,
    )
    return summary


def run_import(config: CinedbConfig, options: ImportOptions | None = None) -> ImportSummary:
    """Open the store, declare the schema, and import datasets.

    Args:
        config: Runtime configuration with data and database paths.
        options: Optional dataset selection.

    Returns:
        Import summary.

    Raises:
        CinedbStoreError: If the store cannot be opened or the schema created.
        CinedbConfigError: If a requested dataset name is unknown.
    """
    resolved_options = options or ImportOptions()
    select_datasets(resolved_options.dataset_names)
    with MovieStore.open(config.database_path) as store:
        initialize_schema(store)
        return import_datasets(
            store,
            config.data_dir,
            resolved_options.dataset_names,
            config.source_encoding,
        )


def render_import_summary(summary: ImportSummary) -> tuple[str, ...]:
    """Render one line per dataset plus a completion line."""
    lines = [_format_dataset_line(result) for result in summary.datasets]
    lines.append(
        f"import completed: database={summary.database_path} "
        f"datasets={len(summary.datasets)} failed={summary.failed_count} "
        f"inserted={summary.inserted_count} skipped={summary.skipped_count}"
    )
    return tuple(lines)


def _format_dataset_line(result: DatasetResult) -> str:
    if result.status == "failed":
        return f"[FAILED] {result.dataset_name} :: {result.error}"
    return (
        f"[OK] {result.dataset_name} read={result.rows_read} inserted={result.inserted} "
        f"duplicates={result.duplicates} malformed={result.malformed} short={result.short} "
        f"transform_failed={result.transform_failed} insert_failed={result.insert_failed}"
    )


def _log_dataset_completion(result: DatasetResult) -> None:
    """Log dataset completion with all counters."""
    _LOGGER.info(
        "dataset_import_completed",
        dataset_name=result.dataset_name,
        source_path=result.source_path,
        rows_read=result.rows_read,
        inserted=result.inserted,
        duplicates=result.duplicates,
        malformed=result.malformed,
        short=result.short,
        transform_failed=result.transform_failed,
        insert_failed=result.insert_failed,
    )
