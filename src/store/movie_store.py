"""SQLite store handle for the movie database.

This module owns the single relational connection used by a command.
The handle is opened, verified, and closed as one scoped resource.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Any, Sequence

from core.errors import CinedbStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class MovieStore:
    """Explicitly owned SQLite connection wrapper.

    Statements run in autocommit mode, so every insert is its own
    isolated transaction and one failing row never rolls back another.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        database_path: Path,
        read_only: bool,
    ) -> None:
        self._connection: sqlite3.Connection | None = connection
        self._database_path = database_path
        self._read_only = read_only

    @classmethod
    def open(cls, database_path: Path, read_only: bool = False) -> "MovieStore":
        """Open and verify a store connection.

        Args:
            database_path: SQLite database file path.
            read_only: Open an existing database without write access.

        Returns:
            Verified store handle.

        Raises:
            CinedbStoreError: If the database cannot be opened or read.
        """
        resolved_path = database_path.expanduser().resolve()
        try:
            connection = _connect(resolved_path, read_only)
        except (OSError, sqlite3.Error) as error:
            raise CinedbStoreError(
                f"Failed to open database at {resolved_path}: {error}. "
                "Check the path and file permissions."
            ) from error
        store = cls(connection, resolved_path, read_only)
        try:
            store.ping()
        except CinedbStoreError:
            store.close()
            raise
        _LOGGER.debug("store_opened", database_path=str(resolved_path), read_only=read_only)
        return store

    @property
    def database_path(self) -> Path:
        """Return the resolved database file path."""
        return self._database_path

    @property
    def read_only(self) -> bool:
        """Return whether the handle was opened read-only."""
        return self._read_only

    @property
    def is_open(self) -> bool:
        """Return whether the connection is still open."""
        return self._connection is not None

    def ping(self) -> None:
        """Verify the file is a readable SQLite database.

        Raises:
            CinedbStoreError: If the header cannot be read.
        """
        try:
            self._require_connection().execute("PRAGMA schema_version").fetchone()
        except sqlite3.Error as error:
            raise CinedbStoreError(
                f"Failed to verify database at {self._database_path}: {error}. "
                "The file may be corrupt or not a SQLite database."
            ) from error

    def execute(self, statement: str, parameters: Sequence[Any] = ()) -> int:
        """Execute one parameterized write statement.

        Args:
            statement: SQL statement with ``?`` placeholders.
            parameters: Positional parameter bindings.

        Returns:
            Number of affected rows.

        Raises:
            sqlite3.Error: Store-level failures are left to the caller.
        """
        cursor = self._require_connection().execute(statement, tuple(parameters))
        return cursor.rowcount

    def query(self, statement: str, parameters: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        """Run a read query and return all rows.

        Args:
            statement: SQL query with ``?`` placeholders.
            parameters: Positional parameter bindings.

        Returns:
            Result rows as tuples.

        Raises:
            sqlite3.Error: Store-level failures are left to the caller.
        """
        cursor = self._require_connection().execute(statement, tuple(parameters))
        try:
            return cursor.fetchall()
        finally:
            cursor.close()

    def close(self) -> None:
        """Close the connection; safe to call more than once."""
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        _LOGGER.debug("store_closed", database_path=str(self._database_path))

    def __enter__(self) -> "MovieStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise CinedbStoreError(
                f"Database handle for {self._database_path} is closed. Open a new store."
            )
        return self._connection


def _connect(database_path: Path, read_only: bool) -> sqlite3.Connection:
    """Create a SQLite connection in autocommit mode.

    Args:
        database_path: Resolved database file path.
        read_only: Open with ``mode=ro`` so the file is never created.

    Returns:
        Open connection.
    """
    if read_only:
        if not database_path.is_file():
            raise CinedbStoreError(
                f"Database not found at {database_path}. Run the import command first."
            )
        return sqlite3.connect(
            f"{database_path.as_uri()}?mode=ro",
            uri=True,
            isolation_level=None,
        )
    database_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(database_path), isolation_level=None)
