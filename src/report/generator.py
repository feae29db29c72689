"""Report generation workflow.

This module runs each report query against a read-only store and
writes one newline-delimited text file per report. A failing report
is recorded and the remaining reports still run.
"""

from __future__ import annotations

import re
import sqlite3
from pathlib import Path
from typing import Callable

from core.config import CinedbConfig
from core.constants import (
    ACTORS_ROLES_REPORT_FILE_NAME,
    DIRECTORS_GENRES_REPORT_FILE_NAME,
    TOP_MOVIES_REPORT_FILE_TEMPLATE,
)
from core.errors import CinedbReportError
from core.logging_config import get_logger
from core.types import ReportOptions, ReportResult
from report.queries import actors_with_roles, directors_with_genres, top_movies_by_genre
from store.movie_store import MovieStore

_LOGGER = get_logger(__name__)

ReportQuery = Callable[[MovieStore], list[str]]


def generate_reports(store: MovieStore, options: ReportOptions) -> tuple[ReportResult, ...]:
    """Run every report and write its file.

    Args:
        store: Open store handle, usually read-only.
        options: Output directory and top-movies parameters.

    Returns:
        One result per report in a fixed order.
    """
    reports: tuple[tuple[str, str, ReportQuery], ...] = (
        (
            "top_movies_by_genre",
            top_movies_file_name(options.genre),
            lambda handle: top_movies_by_genre(handle, options.genre, options.limit),
        ),
        ("directors_genres", DIRECTORS_GENRES_REPORT_FILE_NAME, directors_with_genres),
        ("actors_roles", ACTORS_ROLES_REPORT_FILE_NAME, actors_with_roles),
    )
    return tuple(
        _run_report(store, report_name, options.output_dir / file_name, query)
        for report_name, file_name, query in reports
    )


def run_reports(config: CinedbConfig, options: ReportOptions) -> tuple[ReportResult, ...]:
    """Open the database read-only and generate all reports.

    Raises:
        CinedbStoreError: If the database cannot be opened.
    """
    with MovieStore.open(config.database_path, read_only=True) as store:
        return generate_reports(store, options)


def write_report(output_path: Path, lines: list[str]) -> None:
    """Write report lines, one per line, replacing any existing file.

    Args:
        output_path: Target text file.
        lines: Report lines without trailing newlines.

    Raises:
        CinedbReportError: If the file cannot be written.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as output_file:
            for line in lines:
                output_file.write(line + "\n")
    except OSError as error:
        raise CinedbReportError(
            f"Failed to write report to {output_path}: {error}. "
            "Check that the output directory is writable."
        ) from error


def top_movies_file_name(genre: str) -> str:
    """Build a filesystem-safe file name for the top-movies report."""
    slug = re.sub(r"[^a-z0-9]+", "_", genre.lower()).strip("_") or "all"
    return TOP_MOVIES_REPORT_FILE_TEMPLATE.format(genre=slug)


def render_report_results(results: tuple[ReportResult, ...]) -> tuple[str, ...]:
    """Render one status line per report."""
    lines: list[str] = []
    for result in results:
        if result.status == "written":
            lines.append(
                f"[OK] {result.report_name} lines={result.line_count} path={result.output_path}"
            )
        else:
            lines.append(f"[FAILED] {result.report_name} :: {result.error}")
    return tuple(lines)


def _run_report(
    store: MovieStore,
    report_name: str,
    output_path: Path,
    query: ReportQuery,
) -> ReportResult:
    try:
        lines = _query_report(store, report_name, query)
        write_report(output_path, lines)
    except CinedbReportError as error:
        _LOGGER.error(
            "report_failed",
            report_name=report_name,
            output_path=str(output_path),
            error=str(error),
        )
        return ReportResult(
            report_name=report_name,
            output_path=str(output_path),
            line_count=0,
            status="failed",
            error=str(error),
        )
    _LOGGER.info(
        "report_written",
        report_name=report_name,
        output_path=str(output_path),
        line_count=len(lines),
    )
    return ReportResult(
        report_name=report_name,
        output_path=str(output_path),
        line_count=len(lines),
        status="written",
    )


def _query_report(store: MovieStore, report_name: str, query: ReportQuery) -> list[str]:
    try:
        return query(store)
    except sqlite3.Error as error:
        raise CinedbReportError(
            f"Failed to run {report_name} query against {store.database_path}: {error}. "
            "Run the import command to create and populate the schema."
        ) from error
