"""Batch import of transactions from a record source.

The import runs in three passes so storage sees a fixed number of round trips
no matter how many rows the file holds:

1. Materialize and coerce every row (``value`` becomes ``Decimal``). A source
   that cannot be read, or any row that cannot be coerced, aborts the import
   before storage is touched.
2. Resolve all category titles of the batch in one resolver pass (one lookup,
   one bulk create), deduplicating across the whole batch.
3. Persist every transaction in a single bulk insert, in input order.

By default the import is a trusted bulk path: rows are not checked against the
type/balance rules (the database still refuses unknown types). With
``validate=True`` each row is checked against a running balance seeded from the
current total; refused rows are reported in :attr:`ImportResult.rejected` and
the rest are imported.
"""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike
from typing import Any, TextIO

from .balance import get_balance
from .categories import resolve_categories
from .errors import ImportSourceError, InvalidValue, LedgerError, UnresolvedCategory
from .ingest import read_transaction_rows
from .logging_setup import get_logger
from .models import INCOME, Balance, ImportResult, RawTransactionRow, RejectedRow, TransactionInput
from .storage import LedgerStorage
from .transactions import parse_transaction_input
from .validation import validate_transaction

_logger = get_logger("transaction_ledger.importer")


def _coerce_rows(
    rows: Iterable[RawTransactionRow],
) -> list[tuple[RawTransactionRow, TransactionInput]]:
    coerced: list[tuple[RawTransactionRow, TransactionInput]] = []
    for row in rows:
        try:
            data = parse_transaction_input(
                title=row.title, type_=row.type, value=row.value, category=row.category
            )
        except InvalidValue as e:
            where = f"line {row.line}" if row.line else f"row {len(coerced) + 1}"
            raise ImportSourceError(f"{where}: {e.message}") from e
        coerced.append((row, data))
    return coerced


def _apply(balance: Balance, data: TransactionInput) -> Balance:
    if data.type == INCOME:
        return Balance.from_sums(balance.income + data.value, balance.outcome)
    return Balance.from_sums(balance.income, balance.outcome + data.value)


def _partition_valid(
    storage: LedgerStorage,
    coerced: list[tuple[RawTransactionRow, TransactionInput]],
) -> tuple[list[tuple[RawTransactionRow, TransactionInput]], list[RejectedRow]]:
    accepted: list[tuple[RawTransactionRow, TransactionInput]] = []
    rejected: list[RejectedRow] = []
    running = get_balance(storage)
    for row, data in coerced:
        try:
            validate_transaction(storage, type_=data.type, value=data.value, balance=running)
        except LedgerError as e:
            _logger.warning("Rejected import row %s (%s): %s", row.line, row.title, e.message)
            rejected.append(RejectedRow(row=row, error=e))
            continue
        running = _apply(running, data)
        accepted.append((row, data))
    return accepted, rejected


def import_transactions(
    storage: LedgerStorage,
    rows: Iterable[RawTransactionRow],
    *,
    validate: bool = False,
) -> ImportResult:
    """Persist ``rows`` and any categories they introduce.

    Raises
    ------
    ImportSourceError
        The rows could not be read or coerced; nothing was persisted.
    UnresolvedCategory
        A row's category was missing after resolution. The caller's session
        scope rolls back the whole batch.
    PersistenceFailure
        Propagated from storage.
    """

    coerced = _coerce_rows(rows)
    if validate:
        accepted, rejected = _partition_valid(storage, coerced)
    else:
        accepted, rejected = coerced, []

    if not accepted:
        _logger.info("Import finished: nothing to persist (%d rejected)", len(rejected))
        return ImportResult(transactions=[], rejected=rejected)

    categories = resolve_categories(storage, (data.category for _, data in accepted))

    payloads: list[dict[str, Any]] = []
    for row, data in accepted:
        category = categories.get(data.category)
        if category is None:
            raise UnresolvedCategory(
                f"Category {data.category!r} for row {row.line} ({data.title!r}) was not resolved"
            )
        payloads.append(
            {
                "title": data.title,
                "type": data.type,
                "value": data.value,
                "category_id": category.id,
            }
        )

    transactions = storage.create_transactions(payloads)
    _logger.info(
        "Imported %d transactions across %d categories (%d rejected)",
        len(transactions),
        len(categories),
        len(rejected),
    )
    return ImportResult(transactions=transactions, rejected=rejected)


def import_transactions_from_csv(
    storage: LedgerStorage,
    source: str | PathLike[str] | TextIO,
    *,
    validate: bool = False,
) -> ImportResult:
    """Read a CSV record source and import it (see :func:`import_transactions`)."""

    return import_transactions(storage, read_transaction_rows(source), validate=validate)


__all__ = [
    "import_transactions",
    "import_transactions_from_csv",
]
