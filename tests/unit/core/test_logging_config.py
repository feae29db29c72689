"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

import pytest
import structlog

from core.logging_config import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging()


def test_get_logger_applies_default_configuration(capsys: pytest.CaptureFixture[str]) -> None:
    """Library use without configure_logging should log JSON to stderr at INFO."""
    structlog.reset_defaults()

    logger = get_logger("cinedb.test")
    logger.debug("row_insert_failed", line_number=3)
    logger.info("import_completed", inserted_count=2)
    captured = capsys.readouterr()

    assert structlog.is_configured()
    assert captured.out == ""
    lines = captured.err.strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["event"] == "import_completed"
    assert payload["level"] == "info"
    assert payload["inserted_count"] == 2


def test_configure_logging_lowers_level_for_debug(capsys: pytest.CaptureFixture[str]) -> None:
    """An explicit DEBUG level should let per-row events through."""
    configure_logging("DEBUG")

    get_logger("cinedb.test").debug("row_insert_failed", line_number=3)

    assert json.loads(capsys.readouterr().err)["event"] == "row_insert_failed"
