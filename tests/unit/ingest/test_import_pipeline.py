"""Unit tests for import orchestration."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import CinedbConfig
from core.errors import CinedbConfigError, CinedbStoreError
from core.types import ImportOptions
from ingest.datasets import DEFAULT_DATASETS, select_datasets, supported_dataset_names
from ingest.pipeline import import_dataset, import_datasets, render_import_summary, run_import
from store.movie_store import MovieStore
from store.schema import initialize_schema
from tests.fixture_paths import write_csv


@pytest.fixture
def store(tmp_path: Path):
    with MovieStore.open(tmp_path / "movie.db") as movie_store:
        initialize_schema(movie_store)
        yield movie_store


def _spec(name: str):
    return next(spec for spec in DEFAULT_DATASETS if spec.name == name)


def test_registry_keeps_fixed_order_and_minimums() -> None:
    """Datasets should run in a fixed order with their minimum column counts."""
    assert supported_dataset_names() == (
        "actors",
        "directors",
        "directors_genres",
        "movies",
        "movies_genres",
        "roles",
    )
    assert [spec.min_columns for spec in DEFAULT_DATASETS] == [4, 3, 3, 4, 2, 3]


def test_select_datasets_rejects_unknown_names() -> None:
    """Unknown dataset names are configuration errors."""
    with pytest.raises(CinedbConfigError):
        select_datasets(["actors", "awards"])


def test_import_actors_inserts_joined_names(store: MovieStore, tmp_path: Path) -> None:
    """Two clean actor rows should land as id and full name."""
    write_csv(
        tmp_path / "src" / "IMDB-actors.csv",
        "id,first_name,last_name,gender",
        '"1","Tom","Hanks","M"',
        '"2","Meryl","Streep","F"',
    )

    result = import_dataset(store, _spec("actors"), tmp_path / "src")

    assert result.inserted == 2
    assert store.query("SELECT actor_id, actor_name FROM actors ORDER BY actor_id") == [
        (1, "Tom Hanks"),
        (2, "Meryl Streep"),
    ]


def test_import_movies_keeps_null_year(store: MovieStore, tmp_path: Path) -> None:
    """A NULL year should be stored as NULL next to the parsed rank."""
    write_csv(
        tmp_path / "src" / "IMDB-movies.csv",
        "id,name,year,rank",
        '"5","Inception","NULL","8.8"',
    )

    import_dataset(store, _spec("movies"), tmp_path / "src")

    assert store.query("SELECT * FROM movies") == [(5, "Inception", None, 8.8)]


def test_import_counts_every_skip_reason(store: MovieStore, source_dir: Path) -> None:
    """Counters should separate short, unparsable, and inserted rows."""
    result = import_dataset(store, _spec("actors"), source_dir)

    assert result.status == "completed"
    assert result.rows_read == 6
    assert result.short == 1
    assert result.transform_failed == 1
    assert result.inserted == 4
    assert result.skipped == 2


def test_short_rows_are_never_insert_attempts(store: MovieStore, source_dir: Path) -> None:
    """Insert attempts equal rows that were long enough and transformed."""
    result = import_dataset(store, _spec("directors_genres"), source_dir)

    expected_attempts = result.rows_read - result.malformed - result.short - result.transform_failed
    assert result.short == 1
    assert result.insert_attempts == expected_attempts


def test_duplicate_genre_pair_keeps_one_row(store: MovieStore, source_dir: Path) -> None:
    """A repeated (movie_id, genre) pair should survive once and be counted."""
    result = import_dataset(store, _spec("movies_genres"), source_dir)

    rows = store.query("SELECT COUNT(*) FROM movies_genres WHERE movie_id = 5 AND genre = 'Action'")
    assert rows == [(1,)]
    assert result.duplicates == 1


def test_non_numeric_id_is_absent_from_relation(store: MovieStore, source_dir: Path) -> None:
    """Rows with a non-numeric identifier should not reach the table."""
    import_dataset(store, _spec("directors"), source_dir)

    names = [row[0] for row in store.query("SELECT director_name FROM directors")]
    assert "No Id" not in names
    assert sorted(names) == ["Christopher Nolan", "Greta Gerwig"]


def test_missing_file_fails_only_that_dataset(store: MovieStore, source_dir: Path) -> None:
    """A missing source file should not stop the remaining datasets."""
    (source_dir / "IMDB-directors.csv").unlink()

    summary = import_datasets(store, source_dir)

    statuses = {result.dataset_name: result.status for result in summary.datasets}
    assert statuses["directors"] == "failed"
    assert summary.failed_count == 1
    assert statuses["roles"] == "completed"
    assert store.query("SELECT COUNT(*) FROM roles") == [(4,)]


def test_import_datasets_runs_selected_subset(store: MovieStore, source_dir: Path) -> None:
    """A dataset subset should only touch the selected relations."""
    summary = import_datasets(store, source_dir, ["movies"])

    assert [result.dataset_name for result in summary.datasets] == ["movies"]
    assert store.query("SELECT COUNT(*) FROM actors") == [(0,)]


def test_rerun_reports_duplicates_without_new_rows(config: CinedbConfig) -> None:
    """A second import against a populated store should be a counted no-op."""
    first = run_import(config)
    second = run_import(config)

    assert second.inserted_count == 0
    first_duplicates = sum(result.duplicates for result in first.datasets)
    second_duplicates = sum(result.duplicates for result in second.datasets)
    assert second_duplicates == first.inserted_count + first_duplicates


def test_run_import_raises_when_store_cannot_open(config: CinedbConfig) -> None:
    """An unopenable database is fatal."""
    config.database_path.write_bytes(b"not a sqlite database\n" * 32)

    with pytest.raises(CinedbStoreError):
        run_import(config)


def test_run_import_validates_names_before_opening_store(config: CinedbConfig) -> None:
    """Unknown dataset names should fail before the database is created."""
    with pytest.raises(CinedbConfigError):
        run_import(config, ImportOptions(dataset_names=("awards",)))

    assert config.database_path.exists() is False


def test_render_import_summary_lists_each_dataset(config: CinedbConfig) -> None:
    """Summary rendering should include one line per dataset and a completion line."""
    summary = run_import(config, ImportOptions(dataset_names=("actors", "roles")))

    lines = render_import_summary(summary)

    assert lines[0].startswith("[OK] actors read=6 inserted=4")
    assert lines[-1].startswith("import completed:")
    assert len(lines) == 3


def test_import_actors_accepts_tab_indented_fields(store: MovieStore, tmp_path: Path) -> None:
    """A tab before an identifier should not cost the row."""
    write_csv(
        tmp_path / "src" / "IMDB-actors.csv",
        "id,first_name,last_name,gender",
        "\t1,\tTom,Hanks,M",
    )

    result = import_dataset(store, _spec("actors"), tmp_path / "src")

    assert result.inserted == 1 and result.transform_failed == 0
    assert store.query("SELECT actor_id, actor_name FROM actors") == [(1, "Tom Hanks")]
