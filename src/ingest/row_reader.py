"""Lenient CSV row reader for IMDB source files.

This module streams tokenized rows from one delimited file. It tolerates
stray quotes and variable field counts, strips leading whitespace of
any kind from each field, and reports lines it cannot tokenize instead
of stopping.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterator

from core.constants import CSV_DELIMITER, DEFAULT_SOURCE_ENCODING, MAX_CSV_FIELD_SIZE
from core.errors import CinedbIngestError
from core.types import RawRow

csv.field_size_limit(MAX_CSV_FIELD_SIZE)


def iter_raw_rows(source_path: Path, encoding: str = DEFAULT_SOURCE_ENCODING) -> Iterator[RawRow]:
    """Yield data rows from a CSV file, skipping the header row.

    Args:
        source_path: CSV file to read.
        encoding: Text encoding; undecodable bytes are replaced.

    Yields:
        One RawRow per data row, malformed lines included with an error.
        Blank lines are skipped.

    Raises:
        CinedbIngestError: If the file is missing, unreadable, or has no header.
    """
    try:
        source_file = source_path.open("r", encoding=encoding, errors="replace", newline="")
    except OSError as error:
        raise CinedbIngestError(
            f"Failed to open source file {source_path}: {error.strerror or error}. "
            "Check that the file exists and is readable."
        ) from error
    with source_file:
        reader = csv.reader(
            source_file,
            delimiter=CSV_DELIMITER,
            skipinitialspace=True,
            strict=False,
        )
        _skip_header(reader, source_path)
        yield from _iter_data_rows(reader)


def _skip_header(reader: Any, source_path: Path) -> None:
    """Consume the first non-blank record as the header."""
    try:
        while not next(reader):
            continue
    except StopIteration as error:
        raise CinedbIngestError(
            f"Failed to read header from {source_path}: file is empty. "
            "Provide a CSV file with a header row."
        ) from error
    except csv.Error as error:
        raise CinedbIngestError(
            f"Failed to read header from {source_path}: {error}."
        ) from error
    except OSError as error:
        raise CinedbIngestError(f"Failed to read {source_path}: {error}.") from error


def _iter_data_rows(reader: Any) -> Iterator[RawRow]:
    """Yield rows until end of file, turning tokenizer errors into malformed rows."""
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except OSError as error:
            raise CinedbIngestError(
                f"Failed to read source after line {reader.line_num}: {error}."
            ) from error
        except csv.Error as error:
            yield RawRow(line_number=reader.line_num, fields=(), error=str(error))
            continue
        if not fields:
            continue
        yield RawRow(
            line_number=reader.line_num,
            fields=tuple(field.lstrip() for field in fields),
        )
