"""Core constants used across Cinedb modules.

This module centralizes file names, defaults, and parsing tokens.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_DIR = Path(".")
DEFAULT_REPORT_DIR = Path(".")
DEFAULT_DATABASE_FILE_NAME = "movie.db"
DEFAULT_SOURCE_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

ACTORS_FILE_NAME = "IMDB-actors.csv"
DIRECTORS_FILE_NAME = "IMDB-directors.csv"
DIRECTORS_GENRES_FILE_NAME = "IMDB-directors_genres.csv"
MOVIES_FILE_NAME = "IMDB-movies.csv"
MOVIES_GENRES_FILE_NAME = "IMDB-movies_genres.csv"
ROLES_FILE_NAME = "IMDB-roles.csv"

CSV_DELIMITER = ","
MAX_CSV_FIELD_SIZE = 10 * 1024 * 1024
NULL_TOKENS = ("NULL", "")
NAME_SEPARATOR = " "
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1

DEFAULT_REPORT_GENRE = "Action"
DEFAULT_REPORT_LIMIT = 10
DIRECTORS_GENRES_REPORT_FILE_NAME = "directors_genres.txt"
ACTORS_ROLES_REPORT_FILE_NAME = "actors_roles.txt"
TOP_MOVIES_REPORT_FILE_TEMPLATE = "top_movies_{genre}.txt"
ABSENT_VALUE_LABEL = "NULL"

RUN_SPEC_VERSION = 1
