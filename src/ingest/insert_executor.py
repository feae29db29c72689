"""Single-row insert execution.

This module binds tagged field values to a parameterized statement and
attempts exactly one insert. Store errors are classified and returned,
never raised, so one bad row cannot stop a dataset.
"""

from __future__ import annotations

import sqlite3
from typing import Sequence

from core.logging_config import get_logger
from core.types import (
    AbsentField,
    FieldValue,
    InsertOutcome,
    IntegerField,
    RealField,
    TextField,
)
from store.movie_store import MovieStore

_LOGGER = get_logger(__name__)
_DUPLICATE_KEY_MARKERS = ("UNIQUE constraint failed", "PRIMARY KEY constraint failed")

SqlBinding = int | float | str | None


def to_binding(field: FieldValue) -> SqlBinding:
    """Map one tagged field value to a sqlite parameter binding.

    Args:
        field: Tagged value produced by a row transform.

    Returns:
        Python value accepted by the sqlite3 driver.

    Raises:
        TypeError: If the value is not a known field variant.
    """
    if isinstance(field, IntegerField):
        return field.value
    if isinstance(field, RealField):
        return field.value
    if isinstance(field, TextField):
        return field.value
    if isinstance(field, AbsentField):
        return None
    raise TypeError(f"Unsupported field value type: {type(field).__name__}")


def execute_insert(store: MovieStore, statement: str, row: Sequence[FieldValue]) -> InsertOutcome:
    """Attempt one isolated insert.

    Args:
        store: Open writable store handle.
        statement: Parameterized insert statement.
        row: Typed values in statement parameter order.

    Returns:
        ``inserted`` on success, ``duplicate`` for a key collision,
        ``failed`` for any other store-level error.
    """
    bindings = [to_binding(field) for field in row]
    try:
        store.execute(statement, bindings)
    except sqlite3.IntegrityError as error:
        if _is_duplicate_key(error):
            return "duplicate"
        _log_insert_failure(statement, bindings, error)
        return "failed"
    except sqlite3.Error as error:
        _log_insert_failure(statement, bindings, error)
        return "failed"
    return "inserted"


def _is_duplicate_key(error: sqlite3.IntegrityError) -> bool:
    message = str(error)
    return any(marker in message for marker in _DUPLICATE_KEY_MARKERS)


def _log_insert_failure(statement: str, bindings: list[SqlBinding], error: sqlite3.Error) -> None:
    _LOGGER.debug(
        "row_insert_failed",
        statement=statement,
        bindings=bindings,
        error=str(error),
    )
