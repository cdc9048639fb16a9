"""Record sources feeding the batch importer."""

from .csv_source import iter_rows, read_transaction_rows

__all__ = [
    "iter_rows",
    "read_transaction_rows",
]
