"""Dataset registry for the IMDB import.

This module declares the six source datasets as configuration records.
One generic orchestrator loop consumes them, so adding a dataset means
adding a record here rather than another import function.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import (
    ACTORS_FILE_NAME,
    DIRECTORS_FILE_NAME,
    DIRECTORS_GENRES_FILE_NAME,
    MOVIES_FILE_NAME,
    MOVIES_GENRES_FILE_NAME,
    ROLES_FILE_NAME,
)
from core.errors import CinedbConfigError
from core.types import DatasetSpec
from ingest.transforms import (
    transform_actor,
    transform_director,
    transform_director_genre,
    transform_movie,
    transform_movie_genre,
    transform_role,
)

DEFAULT_DATASETS: tuple[DatasetSpec, ...] = (
    DatasetSpec(
        name="actors",
        file_name=ACTORS_FILE_NAME,
        table="actors",
        min_columns=4,
        transform=transform_actor,
        insert_statement="INSERT INTO actors (actor_id, actor_name) VALUES (?, ?)",
    ),
    DatasetSpec(
        name="directors",
        file_name=DIRECTORS_FILE_NAME,
        table="directors",
        min_columns=3,
        transform=transform_director,
        insert_statement="INSERT INTO directors (director_id, director_name) VALUES (?, ?)",
    ),
    DatasetSpec(
        name="directors_genres",
        file_name=DIRECTORS_GENRES_FILE_NAME,
        table="directors_genres",
        min_columns=3,
        transform=transform_director_genre,
        insert_statement="INSERT INTO directors_genres (director_id, genre) VALUES (?, ?)",
    ),
    DatasetSpec(
        name="movies",
        file_name=MOVIES_FILE_NAME,
        table="movies",
        min_columns=4,
        transform=transform_movie,
        insert_statement=(
            "INSERT INTO movies (movie_id, movie_name, movie_year, movie_rank) "
            "VALUES (?, ?, ?, ?)"
        ),
    ),
    DatasetSpec(
        name="movies_genres",
        file_name=MOVIES_GENRES_FILE_NAME,
        table="movies_genres",
        min_columns=2,
        transform=transform_movie_genre,
        insert_statement="INSERT INTO movies_genres (movie_id, genre) VALUES (?, ?)",
    ),
    DatasetSpec(
        name="roles",
        file_name=ROLES_FILE_NAME,
        table="roles",
        min_columns=3,
        transform=transform_role,
        insert_statement="INSERT INTO roles (actor_id, movie_id, role_name) VALUES (?, ?, ?)",
    ),
)


def supported_dataset_names() -> tuple[str, ...]:
    """Return registered dataset names in import order."""
    return tuple(spec.name for spec in DEFAULT_DATASETS)


def select_datasets(dataset_names: Iterable[str] = ()) -> tuple[DatasetSpec, ...]:
    """Select dataset specs by name, keeping the registry order.

    Args:
        dataset_names: Names to select; every dataset when empty.

    Returns:
        Selected dataset specs.

    Raises:
        CinedbConfigError: If a name is not registered.
    """
    requested = set(dataset_names)
    if not requested:
        return DEFAULT_DATASETS
    unknown_names = sorted(requested - set(supported_dataset_names()))
    if unknown_names:
        raise CinedbConfigError(
            f"Unknown dataset names: {', '.join(unknown_names)}. "
            f"Use any of: {', '.join(supported_dataset_names())}."
        )
    return tuple(spec for spec in DEFAULT_DATASETS if spec.name in requested)
