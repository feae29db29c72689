"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

from cli.main import main
from core.config import CinedbConfig


def _path_args(config: CinedbConfig) -> list[str]:
    return [
        "--data-dir",
        str(config.data_dir),
        "--database",
        str(config.database_path),
        "--report-dir",
        str(config.report_dir),
    ]


def test_cli_schema_lists_tables(config: CinedbConfig, capsys) -> None:
    """Schema command should print every relation name."""
    exit_code = main([*_path_args(config), "schema"])
    output = capsys.readouterr().out.split()

    assert exit_code == 0
    assert "movies" in output and "roles" in output


def test_cli_import_prints_summary_to_stderr(config: CinedbConfig, capsys) -> None:
    """Import command should report per-dataset counters on stderr."""
    exit_code = main([*_path_args(config), "import"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "[OK] actors read=6 inserted=4" in captured.err
    assert "import completed:" in captured.err


def test_cli_import_selects_datasets(config: CinedbConfig, capsys) -> None:
    """Repeated --dataset flags should limit the import."""
    exit_code = main([*_path_args(config), "import", "--dataset", "movies", "--dataset", "roles"])
    err = capsys.readouterr().err

    assert exit_code == 0
    assert "[OK] movies" in err and "[OK] roles" in err
    assert "[OK] actors" not in err


def test_cli_import_strict_fails_on_missing_file(config: CinedbConfig, capsys) -> None:
    """Strict mode should turn a dataset failure into a non-zero exit."""
    (config.data_dir / "IMDB-movies.csv").unlink()

    lenient_exit = main([*_path_args(config), "import"])
    strict_exit = main([*_path_args(config), "import", "--strict"])
    err = capsys.readouterr().err

    assert lenient_exit == 0
    assert strict_exit == 1
    assert "[FAILED] movies" in err


def test_cli_import_reports_fatal_store_error(config: CinedbConfig, capsys) -> None:
    """An unusable database should abort with exit code 1."""
    config.database_path.write_bytes(b"garbage bytes, not sqlite\n" * 32)

    exit_code = main([*_path_args(config), "import"])

    assert exit_code == 1
    assert "error=" in capsys.readouterr().err


def test_cli_report_writes_files(config: CinedbConfig, capsys) -> None:
    """Report command should write reports into the report directory."""
    main([*_path_args(config), "import"])

    exit_code = main([*_path_args(config), "report", "--genre", "Comedy", "--limit", "5"])
    output = capsys.readouterr().out

    assert exit_code == 0
    report_path = Path(config.report_dir) / "top_movies_comedy.txt"
    assert report_path.read_text(encoding="utf-8").splitlines() == [
        "Top 5 Movies in Genre 'Comedy':",
        "Name: Barbie, Year: 2023, Rank: NULL",
    ]
    assert output.count("[OK]") == 3


def test_cli_report_without_database_fails(config: CinedbConfig, capsys) -> None:
    """Report command should fail when the import has not run."""
    exit_code = main([*_path_args(config), "report"])

    assert exit_code == 1
    assert "Database not found" in capsys.readouterr().err


def test_cli_run_spec_executes_steps(config: CinedbConfig, tmp_path: Path, capsys) -> None:
    """Run-spec command should print step output lines."""
    spec_path = tmp_path / "spec.yaml"
    spec_path.write_text(
        "version: 1\nsteps:\n  - command: schema\n  - command: import\n    datasets: [actors]\n",
        encoding="utf-8",
    )

    exit_code = main([*_path_args(config), "run-spec", str(spec_path)])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert output.startswith("tables=actors,directors,directors_genres,movies,movies_genres,roles")
    assert "[OK] actors" in output
