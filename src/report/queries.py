"""Report queries and line formatting.

Each query function reads from an open store and returns the report
lines, header first. Absent years and ranks render as ``NULL``.
"""

from __future__ import annotations

from typing import Any

from core.constants import ABSENT_VALUE_LABEL
from store.movie_store import MovieStore

TOP_MOVIES_BY_GENRE_QUERY = """
    SELECT m.movie_name, m.movie_year, m.movie_rank
    FROM movies m
    JOIN movies_genres mg ON m.movie_id = mg.movie_id
    WHERE mg.genre = ?
    ORDER BY m.movie_rank DESC
    LIMIT ?
"""

DIRECTORS_WITH_GENRES_QUERY = """
    SELECT d.director_name, dg.genre
    FROM directors d
    JOIN directors_genres dg ON d.director_id = dg.director_id
    ORDER BY d.director_name
"""

ACTORS_WITH_ROLES_QUERY = """
    SELECT a.actor_name, r.role_name, m.movie_name
    FROM actors a
    JOIN roles r ON a.actor_id = r.actor_id
    JOIN movies m ON r.movie_id = m.movie_id
    ORDER BY a.actor_name
"""


def top_movies_by_genre(store: MovieStore, genre: str, limit: int) -> list[str]:
    """Return the highest-ranked movies of one genre."""
    lines = [f"Top {limit} Movies in Genre '{genre}':"]
    for name, year, rank in store.query(TOP_MOVIES_BY_GENRE_QUERY, (genre, limit)):
        lines.append(f"Name: {name}, Year: {_format_year(year)}, Rank: {_format_rank(rank)}")
    return lines


def directors_with_genres(store: MovieStore) -> list[str]:
    """Return every director paired with each of their genres."""
    lines = ["Directors and their Genres:"]
    for name, genre in store.query(DIRECTORS_WITH_GENRES_QUERY):
        lines.append(f"Director: {name}, Genre: {genre}")
    return lines


def actors_with_roles(store: MovieStore) -> list[str]:
    """Return every actor role with the movie it belongs to."""
    lines = ["Actors and their Roles:"]
    for actor, role, movie in store.query(ACTORS_WITH_ROLES_QUERY):
        lines.append(f"Actor: {actor}, Role: {role}, Movie: {movie}")
    return lines


def _format_year(value: Any) -> str:
    return ABSENT_VALUE_LABEL if value is None else str(value)


def _format_rank(value: Any) -> str:
    return ABSENT_VALUE_LABEL if value is None else f"{float(value):.2f}"
