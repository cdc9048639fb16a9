"""Acceptance rules for a proposed transaction.

Rules
-----
1. ``type`` must be exactly ``"income"`` or ``"outcome"``
   (:class:`~transaction_ledger.errors.InvalidType`).
2. An outcome's ``value`` may not exceed the current balance total
   (:class:`~transaction_ledger.errors.InsufficientBalance`).

Validation has no side effects. The balance is read at call time unless the
caller supplies one, which the validated batch import does to check rows
against a running total.
"""

from __future__ import annotations

from decimal import Decimal

from .balance import get_balance
from .errors import InsufficientBalance, InvalidType
from .models import OUTCOME, TRANSACTION_TYPES, Balance
from .storage import LedgerStorage


def check_type(type_: str) -> None:
    if type_ not in TRANSACTION_TYPES:
        raise InvalidType(f"The type must be income or outcome (got {type_!r}).")


def check_balance(
    storage: LedgerStorage,
    *,
    type_: str,
    value: Decimal,
    balance: Balance | None = None,
) -> None:
    """Apply rule 2 only; ``type_`` is assumed to have passed :func:`check_type`."""

    if type_ != OUTCOME:
        return
    current = balance if balance is not None else get_balance(storage)
    if value > current.total:
        raise InsufficientBalance(
            f"The outcome value can't be greater than the balance "
            f"(value={value}, balance={current.total})."
        )


def validate_transaction(
    storage: LedgerStorage,
    *,
    type_: str,
    value: Decimal,
    balance: Balance | None = None,
) -> None:
    """Raise when a transaction of ``type_``/``value`` may not be created."""

    check_type(type_)
    check_balance(storage, type_=type_, value=value, balance=balance)


__all__ = [
    "check_balance",
    "check_type",
    "validate_transaction",
]
