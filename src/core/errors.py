"""Cinedb exception hierarchy.

This module defines traceable domain errors with clear boundaries.
The import pipeline tolerates row and dataset errors; store errors are fatal.
"""

from __future__ import annotations


class CinedbError(Exception):
    """Base exception for all Cinedb failures."""


class CinedbConfigError(CinedbError):
    """Raised for invalid runtime configuration."""


class CinedbIngestError(CinedbError):
    """Raised when a whole source dataset cannot be read."""


class CinedbTransformError(CinedbError):
    """Raised when one source row cannot be converted into typed fields."""


class CinedbStoreError(CinedbError):
    """Raised when the relational store cannot be opened or initialized."""


class CinedbReportError(CinedbError):
    """Raised when a report cannot be queried or written."""


class CinedbRunSpecError(CinedbError):
    """Raised for invalid or unsupported run-spec configuration."""
