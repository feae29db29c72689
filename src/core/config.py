"""Runtime configuration model for Cinedb.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_DATABASE_FILE_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPORT_DIR,
    DEFAULT_REPORT_GENRE,
    DEFAULT_REPORT_LIMIT,
    DEFAULT_SOURCE_ENCODING,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import CinedbConfigError


@dataclass(frozen=True)
class CinedbConfig:
    """Validated runtime configuration.

    Attributes:
        data_dir: Directory holding the IMDB source CSV files.
        database_path: SQLite database file path.
        report_dir: Directory where text reports are written.
        source_encoding: Text encoding used to decode source files.
        log_level: Minimum structured log level.
        report_genre: Genre used by the top-movies report.
        report_limit: Row limit used by the top-movies report.
    """

    data_dir: Path
    database_path: Path
    report_dir: Path
    source_encoding: str = DEFAULT_SOURCE_ENCODING
    log_level: str = DEFAULT_LOG_LEVEL
    report_genre: str = DEFAULT_REPORT_GENRE
    report_limit: int = DEFAULT_REPORT_LIMIT

    @classmethod
    def from_env(cls) -> "CinedbConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CinedbConfigError: If environment values are invalid.
        """
        data_dir = _resolve_path(os.getenv("CINEDB_DATA_DIR", str(DEFAULT_DATA_DIR)))
        database_value = os.getenv("CINEDB_DATABASE")
        database_path = (
            _resolve_path(database_value)
            if database_value
            else data_dir / DEFAULT_DATABASE_FILE_NAME
        )
        return cls(
            data_dir=data_dir,
            database_path=database_path,
            report_dir=_resolve_path(os.getenv("CINEDB_REPORT_DIR", str(DEFAULT_REPORT_DIR))),
            source_encoding=_parse_encoding(
                os.getenv("CINEDB_SOURCE_ENCODING", DEFAULT_SOURCE_ENCODING)
            ),
            log_level=_parse_log_level(os.getenv("CINEDB_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
            report_genre=os.getenv("CINEDB_REPORT_GENRE", DEFAULT_REPORT_GENRE),
            report_limit=_parse_report_limit(
                os.getenv("CINEDB_REPORT_LIMIT", str(DEFAULT_REPORT_LIMIT))
            ),
        )


def _resolve_path(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _parse_encoding(raw_value: str) -> str:
    """Validate a source encoding name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        The encoding name as given.

    Raises:
        CinedbConfigError: If Python does not know the codec.
    """
    try:
        codecs.lookup(raw_value)
    except LookupError as error:
        raise CinedbConfigError(
            f"Invalid CINEDB_SOURCE_ENCODING value: unknown codec '{raw_value}'. "
            "Set CINEDB_SOURCE_ENCODING to a codec name such as utf-8 or latin-1."
        ) from error
    return raw_value


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise CinedbConfigError(
            f"Invalid CINEDB_LOG_LEVEL value '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level


def _parse_report_limit(raw_value: str) -> int:
    """Parse the report row limit environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer limit.

    Raises:
        CinedbConfigError: If value is not a positive integer.
    """
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise CinedbConfigError(
            "Invalid CINEDB_REPORT_LIMIT value: "
            f"expected integer, got '{raw_value}'. "
            "Set CINEDB_REPORT_LIMIT to a positive number."
        ) from error
    if limit <= 0:
        raise CinedbConfigError(
            f"Invalid CINEDB_REPORT_LIMIT value {limit}: expected a positive integer."
        )
    return limit
