"""Field coercion helpers for source rows.

This module converts raw CSV text into tagged field values.
Every rejection raises CinedbTransformError so callers can skip the row.
"""

from __future__ import annotations

import math
import re

from core.constants import NAME_SEPARATOR, NULL_TOKENS, SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER
from core.errors import CinedbTransformError
from core.types import ABSENT, AbsentField, IntegerField, RealField, TextField

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_REAL_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)


def parse_identifier(raw_value: str, field_name: str) -> IntegerField:
    """Parse a required base-10 integer identifier.

    Args:
        raw_value: Raw field text.
        field_name: Column name used in error messages.

    Returns:
        Parsed integer field.

    Raises:
        CinedbTransformError: If the text is not an in-range integer.
    """
    if not _INTEGER_PATTERN.fullmatch(raw_value):
        raise CinedbTransformError(
            f"Invalid {field_name} '{raw_value}': expected a base-10 integer."
        )
    value = int(raw_value)
    if not SQLITE_MIN_INTEGER <= value <= SQLITE_MAX_INTEGER:
        raise CinedbTransformError(
            f"Invalid {field_name} '{raw_value}': outside the signed 64-bit range."
        )
    return IntegerField(value)


def parse_optional_integer(raw_value: str, field_name: str) -> IntegerField | AbsentField:
    """Parse an integer that may be missing in source data.

    ``NULL`` and the empty string map to ABSENT; anything else must parse.
    """
    if raw_value in NULL_TOKENS:
        return ABSENT
    return parse_identifier(raw_value, field_name)


def parse_optional_real(raw_value: str, field_name: str) -> RealField | AbsentField:
    """Parse a finite decimal number that may be missing in source data.

    Args:
        raw_value: Raw field text.
        field_name: Column name used in error messages.

    Returns:
        Parsed real field, or ABSENT for a null token.

    Raises:
        CinedbTransformError: If the text is neither a null token nor a finite number.
    """
    if raw_value in NULL_TOKENS:
        return ABSENT
    if not _REAL_PATTERN.fullmatch(raw_value):
        raise CinedbTransformError(
            f"Invalid {field_name} '{raw_value}': expected a decimal number, NULL, or empty."
        )
    value = float(raw_value)
    if not math.isfinite(value):
        raise CinedbTransformError(f"Invalid {field_name} '{raw_value}': value is not finite.")
    return RealField(value)


def text_field(raw_value: str) -> TextField:
    """Wrap source text verbatim."""
    return TextField(raw_value)


def join_name(first_name: str, last_name: str) -> TextField:
    """Build a display name from first and last name fields."""
    return TextField(f"{first_name}{NAME_SEPARATOR}{last_name}")
