"""Per-dataset row transforms.

Each transform turns one tokenized source row into the typed values
bound to its insert statement. Field-count checks happen before this
stage, so transforms index the leading columns directly.
"""

from __future__ import annotations

from typing import Sequence

from core.types import TypedRow
from ingest.field_parsing import (
    join_name,
    parse_identifier,
    parse_optional_integer,
    parse_optional_real,
    text_field,
)


def transform_actor(fields: Sequence[str]) -> TypedRow:
    """Map ``id, first_name, last_name, ...`` to ``(actor_id, actor_name)``."""
    return (parse_identifier(fields[0], "actor_id"), join_name(fields[1], fields[2]))


def transform_director(fields: Sequence[str]) -> TypedRow:
    """Map ``id, first_name, last_name`` to ``(director_id, director_name)``."""
    return (parse_identifier(fields[0], "director_id"), join_name(fields[1], fields[2]))


def transform_director_genre(fields: Sequence[str]) -> TypedRow:
    """Map ``director_id, genre, ...`` to ``(director_id, genre)``."""
    return (parse_identifier(fields[0], "director_id"), text_field(fields[1]))


def transform_movie(fields: Sequence[str]) -> TypedRow:
    """Map ``id, name, year, rank`` to typed movie values.

    Year and rank accept ``NULL`` or an empty field as an absent value.
    """
    return (
        parse_identifier(fields[0], "movie_id"),
        text_field(fields[1]),
        parse_optional_integer(fields[2], "movie_year"),
        parse_optional_real(fields[3], "movie_rank"),
    )


def transform_movie_genre(fields: Sequence[str]) -> TypedRow:
    """Map ``movie_id, genre`` to ``(movie_id, genre)``."""
    return (parse_identifier(fields[0], "movie_id"), text_field(fields[1]))


def transform_role(fields: Sequence[str]) -> TypedRow:
    """Map ``actor_id, movie_id, role`` to typed role values."""
    return (
        parse_identifier(fields[0], "actor_id"),
        parse_identifier(fields[1], "movie_id"),
        text_field(fields[2]),
    )
