"""Record source for batch imports: a flat CSV of transactions.

Expected layout (header names are not checked, only position matters)::

    title, type, value, category
    Coffee, outcome, 5, Food

Row 1 is always treated as a header and skipped. Cells are trimmed on both
sides, blank lines are ignored, and extra trailing cells are dropped. Values
stay as text; numeric coercion is the importer's job.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from os import PathLike
from pathlib import Path
from typing import TextIO

from ..errors import ImportSourceError
from ..models import RawTransactionRow

_COLUMNS = 4


def iter_rows(stream: TextIO, *, source_name: str = "<stream>") -> Iterator[RawTransactionRow]:
    """Yield :class:`RawTransactionRow` objects from an open CSV text stream."""

    reader = csv.reader(stream)
    try:
        for cells in reader:
            if reader.line_num == 1:
                continue
            cells = [c.strip() for c in cells]
            if not any(cells):
                continue
            if len(cells) < _COLUMNS:
                raise ImportSourceError(
                    f"{source_name}:{reader.line_num}: expected {_COLUMNS} columns "
                    f"(title, type, value, category), got {len(cells)}"
                )
            title, type_, value, category = cells[:_COLUMNS]
            yield RawTransactionRow(title, type_, value, category, reader.line_num)
    except csv.Error as e:
        raise ImportSourceError(f"{source_name}: failed to parse CSV: {e}") from e
    except UnicodeDecodeError as e:
        # raised by the file iterator underneath csv.reader
        raise ImportSourceError(f"{source_name}: not valid UTF-8: {e}") from e


def read_transaction_rows(
    source: str | PathLike[str] | TextIO,
) -> Iterator[RawTransactionRow]:
    """Lazily read transaction rows from a CSV path or an open text stream.

    Files are read as UTF-8. A missing or unreadable file raises
    :class:`ImportSourceError` when the iterator is first advanced; bytes that
    do not decode raise it once the reader reaches them.
    """

    if hasattr(source, "read"):
        yield from iter_rows(source)  # type: ignore[arg-type]
        return

    path = Path(source)  # type: ignore[arg-type]
    try:
        f = path.open(encoding="utf-8", newline="")
    except FileNotFoundError as e:
        raise ImportSourceError(f"File not found: {path}") from e
    except OSError as e:
        raise ImportSourceError(f"Cannot read {path}: {e}") from e
    with f:
        yield from iter_rows(f, source_name=str(path))


__all__ = [
    "iter_rows",
    "read_transaction_rows",
]
