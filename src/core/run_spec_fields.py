"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors.
"""

from __future__ import annotations

from typing import Mapping

from core.errors import CinedbRunSpecError


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def optional_int(args: Mapping[str, object], field_name: str) -> int | None:
    """Read an optional integer field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, bool):
        raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be an integer.")
    if isinstance(value, int):
        return value
    raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be an integer.")


def positive_int_with_default(
    args: Mapping[str, object],
    field_name: str,
    default_value: int,
) -> int:
    """Read a positive integer field, falling back when omitted."""
    value = optional_int(args, field_name)
    if value is None:
        return default_value
    if value <= 0:
        raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be a positive integer.")
    return value


def optional_bool(
    args: Mapping[str, object],
    field_name: str,
    default_value: bool,
) -> bool:
    """Read an optional boolean field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        return default_value
    if isinstance(value, bool):
        return value
    raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be true/false.")


def optional_string_list(args: Mapping[str, object], field_name: str) -> tuple[str, ...]:
    """Read an optional list of strings; empty tuple when omitted."""
    value = args.get(field_name)
    if value is None:
        return ()
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(item.strip() for item in value if item.strip())
    raise CinedbRunSpecError(f"Run-spec field '{field_name}' must be a list of strings.")
