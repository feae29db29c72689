"""Relational schema for the movie database.

This module declares the six relations and their lookup indexes.
Every statement is create-if-absent so initialization is idempotent.
"""

from __future__ import annotations

import sqlite3

from core.errors import CinedbStoreError
from core.logging_config import get_logger
from store.movie_store import MovieStore

_LOGGER = get_logger(__name__)

TABLE_STATEMENTS: tuple[tuple[str, str], ...] = (
    (
        "actors",
        """
        CREATE TABLE IF NOT EXISTS actors (
            actor_id INTEGER PRIMARY KEY,
            actor_name TEXT NOT NULL
        )
        """,
    ),
    (
        "directors",
        """
        CREATE TABLE IF NOT EXISTS directors (
            director_id INTEGER PRIMARY KEY,
            director_name TEXT NOT NULL
        )
        """,
    ),
    (
        "directors_genres",
        """
        CREATE TABLE IF NOT EXISTS directors_genres (
            director_id INTEGER,
            genre TEXT NOT NULL,
            PRIMARY KEY (director_id, genre)
        )
        """,
    ),
    (
        "movies",
        """
        CREATE TABLE IF NOT EXISTS movies (
            movie_id INTEGER PRIMARY KEY,
            movie_name TEXT NOT NULL,
            movie_year INTEGER,
            movie_rank REAL
        )
        """,
    ),
    (
        "movies_genres",
        """
        CREATE TABLE IF NOT EXISTS movies_genres (
            movie_id INTEGER,
            genre TEXT NOT NULL,
            PRIMARY KEY (movie_id, genre)
        )
        """,
    ),
    (
        "roles",
        """
        CREATE TABLE IF NOT EXISTS roles (
            actor_id INTEGER,
            movie_id INTEGER,
            role_name TEXT NOT NULL,
            PRIMARY KEY (actor_id, movie_id)
        )
        """,
    ),
)

INDEX_STATEMENTS: tuple[tuple[str, str], ...] = (
    (
        "idx_movies_genres_genre",
        "CREATE INDEX IF NOT EXISTS idx_movies_genres_genre ON movies_genres (genre)",
    ),
    (
        "idx_directors_genres_genre",
        "CREATE INDEX IF NOT EXISTS idx_directors_genres_genre ON directors_genres (genre)",
    ),
    ("idx_roles_movie_id", "CREATE INDEX IF NOT EXISTS idx_roles_movie_id ON roles (movie_id)"),
    ("idx_movies_rank", "CREATE INDEX IF NOT EXISTS idx_movies_rank ON movies (movie_rank)"),
)

TABLE_NAMES: tuple[str, ...] = tuple(name for name, _ in TABLE_STATEMENTS)


def initialize_schema(store: MovieStore) -> tuple[str, ...]:
    """Create all relations and indexes that do not exist yet.

    Args:
        store: Open writable store handle.

    Returns:
        Names of the declared relations.

    Raises:
        CinedbStoreError: If any relation or index cannot be created.
    """
    for table_name, statement in TABLE_STATEMENTS:
        _execute_ddl(store, statement, table_name)
    for index_name, statement in INDEX_STATEMENTS:
        _execute_ddl(store, statement, index_name)
    _LOGGER.info(
        "schema_initialized",
        database_path=str(store.database_path),
        tables=list(TABLE_NAMES),
    )
    return TABLE_NAMES


def list_tables(store: MovieStore) -> tuple[str, ...]:
    """Return the user relation names present in the store, sorted.

    Args:
        store: Open store handle.

    Returns:
        Sorted relation names.

    Raises:
        CinedbStoreError: If the catalog cannot be read.
    """
    try:
        rows = store.query(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
    except sqlite3.Error as error:
        raise CinedbStoreError(
            f"Failed to list tables in {store.database_path}: {error}."
        ) from error
    return tuple(str(row[0]) for row in rows)


def _execute_ddl(store: MovieStore, statement: str, object_name: str) -> None:
    try:
        store.execute(statement)
    except sqlite3.Error as error:
        raise CinedbStoreError(
            f"Failed to create {object_name} in {store.database_path}: {error}. "
            "Check that the database is writable and not corrupt."
        ) from error
