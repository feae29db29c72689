"""Shared typed models.

This module defines immutable data models used by the ingest, store,
and report layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Sequence, Union

from core.constants import DEFAULT_REPORT_GENRE, DEFAULT_REPORT_LIMIT


@dataclass(frozen=True)
class IntegerField:
    """Integer column value."""

    value: int


@dataclass(frozen=True)
class RealField:
    """Floating-point column value."""

    value: float


@dataclass(frozen=True)
class TextField:
    """Text column value."""

    value: str


@dataclass(frozen=True)
class AbsentField:
    """Explicit absence of an optional value, stored as SQL NULL."""


ABSENT = AbsentField()

FieldValue = Union[IntegerField, RealField, TextField, AbsentField]
TypedRow = tuple[FieldValue, ...]
RowTransform = Callable[[Sequence[str]], TypedRow]
InsertOutcome = Literal["inserted", "duplicate", "failed"]
DatasetStatus = Literal["completed", "failed"]
ReportStatus = Literal["written", "failed"]


@dataclass(frozen=True)
class RawRow:
    """One tokenized line from a delimited source.

    Attributes:
        line_number: One-based physical line number where the row ends.
        fields: Tokenized field values, empty when the line was malformed.
        error: Tokenizer error message for a malformed line.
    """

    line_number: int
    fields: tuple[str, ...]
    error: str | None = None

    @property
    def is_malformed(self) -> bool:
        """Return whether the line could not be tokenized."""
        return self.error is not None


@dataclass(frozen=True)
class DatasetSpec:
    """Configuration for importing one source dataset.

    Attributes:
        name: Dataset identifier used in logs and summaries.
        file_name: Source CSV file name inside the data directory.
        table: Target relation name.
        min_columns: Minimum field count a row needs to be transformed.
        transform: Row transform producing typed insert values.
        insert_statement: Parameterized insert statement for the relation.
    """

    name: str
    file_name: str
    table: str
    min_columns: int
    transform: RowTransform
    insert_statement: str


@dataclass
class DatasetResult:
    """Mutable per-dataset import counters.

    Attributes:
        dataset_name: Dataset identifier.
        source_path: Source file that was read.
        rows_read: Data rows produced by the reader, malformed ones included.
        malformed: Lines the tokenizer could not parse.
        short: Rows with fewer fields than the dataset minimum.
        transform_failed: Rows rejected by field parsing.
        inserted: Rows written to the store.
        duplicates: Rows rejected by a primary-key collision.
        insert_failed: Rows rejected by any other store error.
        status: Final dataset status.
        error: Dataset-level error message when status is ``failed``.
    """

    dataset_name: str
    source_path: str
    rows_read: int = 0
    malformed: int = 0
    short: int = 0
    transform_failed: int = 0
    inserted: int = 0
    duplicates: int = 0
    insert_failed: int = 0
    status: DatasetStatus = "completed"
    error: str | None = None

    @property
    def skipped(self) -> int:
        """Count rows that were read but not inserted."""
        return (
            self.malformed
            + self.short
            + self.transform_failed
            + self.duplicates
            + self.insert_failed
        )

    @property
    def insert_attempts(self) -> int:
        """Count rows handed to the insert executor."""
        return self.inserted + self.duplicates + self.insert_failed


@dataclass(frozen=True)
class ImportSummary:
    """Results for one import run across datasets.

    Attributes:
        database_path: Store the rows were written to.
        datasets: Ordered per-dataset results.
    """

    database_path: str
    datasets: tuple[DatasetResult, ...]

    @property
    def failed_count(self) -> int:
        """Count datasets that could not be read."""
        return sum(1 for result in self.datasets if result.status == "failed")

    @property
    def inserted_count(self) -> int:
        """Count rows inserted across datasets."""
        return sum(result.inserted for result in self.datasets)

    @property
    def skipped_count(self) -> int:
        """Count rows skipped across datasets."""
        return sum(result.skipped for result in self.datasets)


@dataclass(frozen=True)
class ImportOptions:
    """Import command options.

    Attributes:
        dataset_names: Optional subset of dataset names; all when empty.
        strict: Treat dataset-level failures as a failed run.
    """

    dataset_names: tuple[str, ...] = ()
    strict: bool = False


@dataclass(frozen=True)
class ReportOptions:
    """Report command options.

    Attributes:
        output_dir: Directory receiving report files.
        genre: Genre for the top-movies report.
        limit: Maximum rows in the top-movies report.
    """

    output_dir: Path
    genre: str = DEFAULT_REPORT_GENRE
    limit: int = DEFAULT_REPORT_LIMIT


@dataclass(frozen=True)
class ReportResult:
    """Outcome of generating one report file.

    Attributes:
        report_name: Report identifier.
        output_path: Target file path.
        line_count: Lines written, header included.
        status: Whether the report was written.
        error: Failure message when status is ``failed``.
    """

    report_name: str
    output_path: str
    line_count: int
    status: ReportStatus
    error: str | None = None
