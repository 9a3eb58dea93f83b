"""
I/O utilities for the flow tree builder.

This module reads a transaction CSV export into plain row mappings. Column
names are kept verbatim; resolving them is the column resolver's job.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)

ALLOWED_SUFFIXES = (".csv",)
MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024
DEFAULT_MAX_ROWS = 100_000


def _validate_file(path: Path, max_file_size: int) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Input CSV not found: {path}")
    if not path.is_file():
        raise ValueError(f"Input path is not a file: {path}")
    if path.suffix.lower() not in ALLOWED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type {path.suffix!r}; expected one of {list(ALLOWED_SUFFIXES)}"
        )
    size = path.stat().st_size
    if size > max_file_size:
        raise ValueError(
            f"Input file too large: {size} bytes (limit {max_file_size} bytes)"
        )


def read_rows(
    path: Path,
    max_rows: int = DEFAULT_MAX_ROWS,
    max_file_size: int = MAX_FILE_SIZE_BYTES,
) -> List[Dict[str, str]]:
    """
    Read a transaction CSV into a list of row dicts.

    - The header row supplies the column names; a leading BOM is dropped.
    - Missing trailing cells become empty strings.
    - Fully blank lines are ignored by the csv module.

    Args:
        path: Path to the CSV file.
        max_rows: Upper bound on data rows; larger files are rejected.
        max_file_size: Upper bound on file size in bytes.

    Returns:
        Rows in file order.

    Raises:
        FileNotFoundError: If `path` does not exist.
        ValueError: If the file type, size, header or row count is invalid,
            or the file has no data rows.
    """
    _validate_file(path, max_file_size)

    rows: List[Dict[str, str]] = []
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f, restval="")
        if not reader.fieldnames:
            raise ValueError(f"Missing CSV header row: {path}")

        for row in reader:
            if len(rows) >= max_rows:
                raise ValueError(f"Too many rows in {path}: limit is {max_rows}")
            # Cells beyond the header end up under the None key.
            extra = row.pop(None, None)  # type: ignore[call-overload]
            if extra:
                logger.debug(
                    "Dropping %d cells without a header at line %d",
                    len(extra),
                    reader.line_num,
                )
            rows.append(row)

    if not rows:
        raise ValueError(f"File detected as empty (no rows parsed): {path}")

    logger.info("Read %d rows from %s", len(rows), path)
    return rows
