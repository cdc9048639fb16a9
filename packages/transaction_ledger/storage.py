# ruff: noqa: I001
"""Storage collaborator for the ledger core.

Services depend on the :class:`LedgerStorage` protocol and receive an instance
explicitly; they never reach for a global repository. The production
implementation, :class:`SqlAlchemyLedgerStorage`, wraps a SQLAlchemy session
from ``db.client`` and writes the ORM models defined in ``db.models.ledger``.

Transaction scope
-----------------
The storage flushes but never commits. Callers own the unit of work via
``db.client.session_scope()``, which commits on success and rolls back on any
exception, so "resolve category + create transaction" and a whole batch import
are each all-or-nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from functools import wraps
from typing import Any, Protocol, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.ledger import Category, Transaction
from .errors import PersistenceFailure

_T = TypeVar("_T")


class LedgerStorage(Protocol):
    """Capabilities the ledger core needs from persistence."""

    def find_categories(self, titles: Collection[str]) -> list[Category]: ...

    def create_categories(self, titles: Sequence[str]) -> list[Category]: ...

    def find_transaction(self, transaction_id: str) -> Transaction | None: ...

    def create_transaction(self, fields: Mapping[str, Any]) -> Transaction: ...

    def create_transactions(self, rows: Iterable[Mapping[str, Any]]) -> list[Transaction]: ...

    def remove_transaction(self, transaction: Transaction) -> None: ...

    def sum_transactions_by_type(self, type_: str) -> Decimal: ...

    def list_transactions(self) -> list[Transaction]: ...


def _translating_errors(fn: Callable[..., _T]) -> Callable[..., _T]:
    """Re-raise driver/ORM errors as :class:`PersistenceFailure`."""

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> _T:
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"{fn.__name__} failed: {e}") from e

    return wrapper


class SqlAlchemyLedgerStorage:
    """:class:`LedgerStorage` backed by a caller-owned SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @_translating_errors
    def find_categories(self, titles: Collection[str]) -> list[Category]:
        if not titles:
            return []
        stmt = select(Category).where(Category.title.in_(set(titles)))
        return list(self.session.execute(stmt).scalars().all())

    @_translating_errors
    def create_categories(self, titles: Sequence[str]) -> list[Category]:
        rows = [Category(title=t) for t in titles]
        if rows:
            self.session.add_all(rows)
            self.session.flush()
        return rows

    @_translating_errors
    def find_transaction(self, transaction_id: str) -> Transaction | None:
        return self.session.get(Transaction, transaction_id)

    @_translating_errors
    def create_transaction(self, fields: Mapping[str, Any]) -> Transaction:
        row = Transaction(**fields)
        self.session.add(row)
        self.session.flush()
        return row

    @_translating_errors
    def create_transactions(self, rows: Iterable[Mapping[str, Any]]) -> list[Transaction]:
        created = [Transaction(**fields) for fields in rows]
        if created:
            # created_at strictly increases through the batch, in input order
            base = datetime.now(UTC)
            for offset, row in enumerate(created):
                if row.created_at is None:
                    row.created_at = base + timedelta(microseconds=offset)
            self.session.add_all(created)
            self.session.flush()
        return created

    @_translating_errors
    def remove_transaction(self, transaction: Transaction) -> None:
        self.session.delete(transaction)
        self.session.flush()

    @_translating_errors
    def sum_transactions_by_type(self, type_: str) -> Decimal:
        stmt = select(func.coalesce(func.sum(Transaction.value), 0)).where(
            Transaction.type == type_
        )
        raw = self.session.execute(stmt).scalar_one()
        # SQLite hands back int/float for SUM; normalize to 2dp Decimal.
        return Decimal(str(raw)).quantize(Decimal("0.01"))

    @_translating_errors
    def list_transactions(self) -> list[Transaction]:
        """All transactions in creation order.

        Rows of one bulk insert keep their input order (see
        :meth:`create_transactions`); ``id`` only breaks exact timestamp ties.
        """

        stmt = select(Transaction).order_by(Transaction.created_at, Transaction.id)
        return list(self.session.execute(stmt).scalars().all())


__all__ = [
    "LedgerStorage",
    "SqlAlchemyLedgerStorage",
]
