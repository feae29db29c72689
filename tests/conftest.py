"""Pytest configuration for repository test runs."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from core.config import CinedbConfig
from tests.fixture_paths import fixture_path


@pytest.fixture(autouse=True)
def _clear_cinedb_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from CINEDB_* variables set in the calling shell."""
    for name in (
        "CINEDB_DATA_DIR",
        "CINEDB_DATABASE",
        "CINEDB_REPORT_DIR",
        "CINEDB_SOURCE_ENCODING",
        "CINEDB_LOG_LEVEL",
        "CINEDB_REPORT_GENRE",
        "CINEDB_REPORT_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Copy the small IMDB fixture set into a writable directory."""
    target_dir = tmp_path / "source"
    shutil.copytree(fixture_path("imdb_small"), target_dir)
    return target_dir


@pytest.fixture
def config(tmp_path: Path, source_dir: Path) -> CinedbConfig:
    """Config pointing at the copied fixtures and a fresh database."""
    return CinedbConfig(
        data_dir=source_dir,
        database_path=tmp_path / "movie.db",
        report_dir=tmp_path / "reports",
    )
