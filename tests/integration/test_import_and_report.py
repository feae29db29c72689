"""Integration tests for the import and report workflow."""

from __future__ import annotations

from pathlib import Path

from core.config import CinedbConfig
from core.types import ReportOptions
from store.database_sdk import CinedbClient


def test_import_then_report_flow(config: CinedbConfig, tmp_path: Path) -> None:
    """End-to-end flow should populate every relation and write reports."""
    client = CinedbClient(config)

    summary = client.import_datasets()
    results = client.generate_reports(ReportOptions(output_dir=tmp_path / "reports"))

    inserted = {result.dataset_name: result.inserted for result in summary.datasets}
    assert inserted == {
        "actors": 4,
        "directors": 2,
        "directors_genres": 3,
        "movies": 4,
        "movies_genres": 5,
        "roles": 4,
    }
    assert summary.failed_count == 0
    assert all(result.status == "written" for result in results)
    assert (tmp_path / "reports" / "top_movies_action.txt").exists()


def test_client_paths_override_config(config: CinedbConfig, tmp_path: Path) -> None:
    """Path overrides should produce a client bound to the new database."""
    other_database = tmp_path / "other" / "movie.db"

    client = CinedbClient(config).with_paths(database=str(other_database))
    tables = client.initialize_schema()

    assert client.config.data_dir == config.data_dir
    assert other_database.exists()
    assert len(tables) == 6
