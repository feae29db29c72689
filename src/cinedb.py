"""Public SDK surface for Cinedb.

This module provides a stable import path for library users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import CinedbConfig
from core.types import (
    ABSENT,
    DatasetResult,
    ImportOptions,
    ImportSummary,
    ReportOptions,
    ReportResult,
)
from ingest.datasets import DEFAULT_DATASETS, supported_dataset_names
from store.database_sdk import CinedbClient
from store.movie_store import MovieStore

__all__ = [
    "ABSENT",
    "CinedbClient",
    "CinedbConfig",
    "DEFAULT_DATASETS",
    "DatasetResult",
    "ImportOptions",
    "ImportSummary",
    "MovieStore",
    "ReportOptions",
    "ReportResult",
    "supported_dataset_names",
]
