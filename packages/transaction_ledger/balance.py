"""Ledger balance computed from the persisted transaction set."""

from __future__ import annotations

from .logging_setup import get_logger
from .models import INCOME, OUTCOME, Balance
from .storage import LedgerStorage

_logger = get_logger("transaction_ledger.balance")


def get_balance(storage: LedgerStorage) -> Balance:
    """Return income/outcome sums and ``total = income - outcome``.

    Always reads from storage; nothing is cached between calls.
    """

    income = storage.sum_transactions_by_type(INCOME)
    outcome = storage.sum_transactions_by_type(OUTCOME)
    balance = Balance.from_sums(income, outcome)
    _logger.debug(
        "Balance computed: income=%s outcome=%s total=%s",
        balance.income,
        balance.outcome,
        balance.total,
    )
    return balance


__all__ = ["get_balance"]
