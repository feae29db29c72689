"""Unit tests for field coercion helpers."""

from __future__ import annotations

import pytest

from core.errors import CinedbTransformError
from core.types import ABSENT, IntegerField, RealField, TextField
from ingest.field_parsing import (
    join_name,
    parse_identifier,
    parse_optional_integer,
    parse_optional_real,
)


@pytest.mark.parametrize("raw_value, expected", [("42", 42), ("-7", -7), ("+3", 3), ("007", 7)])
def test_parse_identifier_accepts_integers(raw_value: str, expected: int) -> None:
    """Identifiers should parse signed base-10 integers."""
    assert parse_identifier(raw_value, "actor_id") == IntegerField(expected)


@pytest.mark.parametrize("raw_value", ["abc", "", "1.5", " 1", "1 ", "1_000", "NULL", "٣"])
def test_parse_identifier_rejects_non_integers(raw_value: str) -> None:
    """Identifiers should reject anything but plain ASCII digits."""
    with pytest.raises(CinedbTransformError):
        parse_identifier(raw_value, "actor_id")


def test_parse_identifier_rejects_out_of_range_values() -> None:
    """Identifiers wider than 64 bits cannot be stored and must be rejected."""
    with pytest.raises(CinedbTransformError):
        parse_identifier(str(2**63), "movie_id")


@pytest.mark.parametrize("raw_value", ["NULL", ""])
def test_optional_fields_map_null_tokens_to_absent(raw_value: str) -> None:
    """NULL and empty text should become the absence marker, not zero."""
    assert parse_optional_integer(raw_value, "movie_year") is ABSENT
    assert parse_optional_real(raw_value, "movie_rank") is ABSENT


def test_parse_optional_integer_parses_year() -> None:
    """A present year should parse as an integer."""
    assert parse_optional_integer("1994", "movie_year") == IntegerField(1994)


@pytest.mark.parametrize(
    "raw_value, expected",
    [("8.8", 8.8), ("7", 7.0), (".5", 0.5), ("1e1", 10.0)],
)
def test_parse_optional_real_parses_decimals(raw_value: str, expected: float) -> None:
    """A present rank should parse as a float."""
    assert parse_optional_real(raw_value, "movie_rank") == RealField(expected)


@pytest.mark.parametrize("raw_value", ["null", "great", "nan", "inf", " 8.8", "8,8"])
def test_parse_optional_real_rejects_other_content(raw_value: str) -> None:
    """Non-numeric rank text other than the null tokens is a transform failure."""
    with pytest.raises(CinedbTransformError):
        parse_optional_real(raw_value, "movie_rank")


def test_join_name_uses_single_space() -> None:
    """Display names should join first and last name with one space."""
    assert join_name("Tom", "Hanks") == TextField("Tom Hanks")
