"""Create and delete single transactions.

Both operations work against an injected :class:`~transaction_ledger.storage.LedgerStorage`
and leave committing to the caller's session scope. ``create_transaction``
either persists a fully valid transaction (with its category, created when
missing) or raises before anything is written.
"""

from __future__ import annotations

from decimal import Decimal

from db.models.ledger import Transaction
from pydantic import ValidationError

from .categories import resolve_category
from .errors import InvalidValue, NotFound
from .logging_setup import get_logger
from .models import TransactionInput
from .storage import LedgerStorage
from .validation import check_balance, check_type

_logger = get_logger("transaction_ledger.transactions")


def _describe_validation_error(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{loc}: {item.get('msg')}")
    return "; ".join(parts)


def parse_transaction_input(
    *, title: str, type_: str, value: Decimal | float | int | str, category: str
) -> TransactionInput:
    """Coerce raw fields into a :class:`TransactionInput` or raise ``InvalidValue``."""

    try:
        return TransactionInput(title=title, type=type_, value=value, category=category)
    except ValidationError as e:
        raise InvalidValue(f"Invalid transaction fields: {_describe_validation_error(e)}") from e


def create_transaction(
    storage: LedgerStorage,
    *,
    title: str,
    type_: str,
    value: Decimal | float | int | str,
    category: str,
) -> Transaction:
    """Validate, resolve the category, and persist one transaction.

    Raises
    ------
    InvalidType
        ``type_`` is not ``income``/``outcome``.
    InvalidValue
        ``value`` is not a non-negative number, or a text field is empty.
    InsufficientBalance
        An outcome larger than the current balance total.
    PersistenceFailure
        Propagated from storage.
    """

    # Type is checked on the raw input, before parsing can strip or reject it.
    check_type(type_)
    data = parse_transaction_input(title=title, type_=type_, value=value, category=category)
    check_balance(storage, type_=data.type, value=data.value)

    category_row = resolve_category(storage, data.category)
    tx = storage.create_transaction(
        {
            "title": data.title,
            "type": data.type,
            "value": data.value,
            "category_id": category_row.id,
        }
    )
    _logger.info(
        "Created %s transaction %s (%s, %s) in category %r",
        tx.type,
        tx.id,
        tx.title,
        tx.value,
        category_row.title,
    )
    return tx


def delete_transaction(storage: LedgerStorage, transaction_id: str) -> None:
    """Remove the transaction ``transaction_id``; its category is left alone."""

    tx = storage.find_transaction(transaction_id)
    if tx is None:
        raise NotFound(f"Transaction {transaction_id!r} not found; it cannot be deleted.")
    storage.remove_transaction(tx)
    _logger.info("Deleted transaction %s", transaction_id)


__all__ = [
    "parse_transaction_input",
    "create_transaction",
    "delete_transaction",
]
