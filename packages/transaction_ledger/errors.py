"""Typed errors raised by the ledger core.

Every error carries a machine-readable ``kind`` and an optional HTTP-style
``status_code`` so hosts (CLI, web handlers) can map failures without parsing
messages. The core never formats responses itself.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all ledger failures."""

    kind: str = "ledger_error"
    default_status: int | None = 400

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r})"


class InvalidType(LedgerError):
    kind = "invalid_type"


class InvalidValue(LedgerError):
    kind = "invalid_value"


class InsufficientBalance(LedgerError):
    kind = "insufficient_balance"


class NotFound(LedgerError):
    kind = "not_found"
    default_status = 404


class PersistenceFailure(LedgerError):
    """A storage operation failed; the original exception is chained."""

    kind = "persistence_failure"
    default_status = 500


class ImportSourceError(LedgerError):
    """The record source could not be read or one of its rows could not be parsed."""

    kind = "import_source"


class UnresolvedCategory(LedgerError):
    # Raised when a batch row's category is missing after resolution.
    kind = "unresolved_category"
    default_status = 500


__all__ = [
    "LedgerError",
    "InvalidType",
    "InvalidValue",
    "InsufficientBalance",
    "NotFound",
    "PersistenceFailure",
    "ImportSourceError",
    "UnresolvedCategory",
]
