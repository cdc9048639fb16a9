"""Public interface for the ``transaction_ledger`` package.

Session-owning operations live in :mod:`transaction_ledger.api`; the service
functions re-exported here take an explicit
:class:`~transaction_ledger.storage.LedgerStorage` for hosts that manage their
own database sessions.
"""

from .balance import get_balance
from .categories import resolve_categories, resolve_category
from .errors import (
    ImportSourceError,
    InsufficientBalance,
    InvalidType,
    InvalidValue,
    LedgerError,
    NotFound,
    PersistenceFailure,
    UnresolvedCategory,
)
from .importer import import_transactions, import_transactions_from_csv
from .models import Balance, ImportResult, RawTransactionRow, RejectedRow, TransactionInput
from .storage import LedgerStorage, SqlAlchemyLedgerStorage
from .transactions import create_transaction, delete_transaction
from .validation import validate_transaction

__all__ = [
    # Services
    "get_balance",
    "resolve_categories",
    "resolve_category",
    "validate_transaction",
    "create_transaction",
    "delete_transaction",
    "import_transactions",
    "import_transactions_from_csv",
    # Storage
    "LedgerStorage",
    "SqlAlchemyLedgerStorage",
    # Models
    "Balance",
    "ImportResult",
    "RawTransactionRow",
    "RejectedRow",
    "TransactionInput",
    # Errors
    "LedgerError",
    "InvalidType",
    "InvalidValue",
    "InsufficientBalance",
    "NotFound",
    "PersistenceFailure",
    "ImportSourceError",
    "UnresolvedCategory",
]
