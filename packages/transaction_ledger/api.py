"""Public API for the ``transaction_ledger`` package.

Each function here is one unit of work: it opens a session through
``db.client.session_scope`` (commit on success, rollback on any error), wraps
it in :class:`~transaction_ledger.storage.SqlAlchemyLedgerStorage`, and
delegates to the service modules. Hosts that manage their own sessions can call
the service functions directly with any :class:`LedgerStorage`.

``database_url`` falls back to ``$DATABASE_URL`` when omitted.
"""

from __future__ import annotations

from decimal import Decimal
from os import PathLike
from typing import TextIO

from db.client import session_scope
from db.models.ledger import Transaction

from . import balance as _balance
from . import importer as _importer
from . import transactions as _transactions
from .models import Balance, ImportResult
from .storage import SqlAlchemyLedgerStorage


def create_transaction(
    title: str,
    type_: str,
    value: Decimal | float | int | str,
    category: str,
    *,
    database_url: str | None = None,
) -> Transaction:
    """Create one validated transaction, creating its category when new."""

    with session_scope(database_url=database_url) as session:
        return _transactions.create_transaction(
            SqlAlchemyLedgerStorage(session),
            title=title,
            type_=type_,
            value=value,
            category=category,
        )


def delete_transaction(transaction_id: str, *, database_url: str | None = None) -> None:
    """Delete a transaction by id; raises ``NotFound`` when absent."""

    with session_scope(database_url=database_url) as session:
        _transactions.delete_transaction(SqlAlchemyLedgerStorage(session), transaction_id)


def import_transactions_from_csv(
    source: str | PathLike[str] | TextIO,
    *,
    database_url: str | None = None,
    validate: bool = False,
) -> ImportResult:
    """Import a CSV of ``title,type,value,category`` rows as one unit of work."""

    with session_scope(database_url=database_url) as session:
        return _importer.import_transactions_from_csv(
            SqlAlchemyLedgerStorage(session), source, validate=validate
        )


def get_balance(*, database_url: str | None = None) -> Balance:
    with session_scope(database_url=database_url) as session:
        return _balance.get_balance(SqlAlchemyLedgerStorage(session))


def list_transactions_with_balance(
    *, database_url: str | None = None
) -> tuple[list[Transaction], Balance]:
    """Return every transaction (oldest first) together with the current balance."""

    with session_scope(database_url=database_url) as session:
        storage = SqlAlchemyLedgerStorage(session)
        return storage.list_transactions(), _balance.get_balance(storage)


__all__ = [
    "create_transaction",
    "delete_transaction",
    "import_transactions_from_csv",
    "get_balance",
    "list_transactions_with_balance",
]
