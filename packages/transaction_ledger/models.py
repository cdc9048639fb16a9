"""Data models and type aliases for ``transaction_ledger``.

Persisted rows (``Category``/``Transaction``) are the SQLAlchemy models owned by
``libs/db``; this module holds the in-process shapes that flow between the
record source, the validator and the services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:  # pragma: no cover - typing only
    from db.models.ledger import Transaction

    from .errors import LedgerError

# ---------------------------------------------------------------------------
# Transaction types
# ---------------------------------------------------------------------------

type TransactionType = Literal["income", "outcome"]

INCOME: TransactionType = "income"
OUTCOME: TransactionType = "outcome"
TRANSACTION_TYPES: tuple[str, ...] = (INCOME, OUTCOME)

_CENT = Decimal("0.01")


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class RawTransactionRow(NamedTuple):
    """One row from a record source, as trimmed text.

    ``line`` is the 1-based line number in the source file (the header is
    line 1), used only for error reporting.
    """

    title: str
    type: str
    value: str
    category: str
    line: int = 0


class TransactionInput(BaseModel):
    """Fields needed to create one transaction.

    ``type`` is deliberately a plain string: membership in
    :data:`TRANSACTION_TYPES` is a business rule checked by
    :func:`transaction_ledger.validation.validate_transaction`, which reports
    :class:`~transaction_ledger.errors.InvalidType` rather than a schema error.
    ``value`` is coerced from text or numbers to ``Decimal`` and must fit the
    storage column (at most 18 digits, 2 of them after the point), so what is
    validated is exactly what gets stored.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str
    type: str
    value: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    category: str

    @field_validator("title", "category")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("value")
    @classmethod
    def _to_cents(cls, v: Decimal) -> Decimal:
        return v.quantize(_CENT)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Balance:
    """Ledger totals; ``total`` is always ``income - outcome``."""

    income: Decimal
    outcome: Decimal
    total: Decimal

    @classmethod
    def from_sums(cls, income: Decimal, outcome: Decimal) -> Balance:
        return cls(income=income, outcome=outcome, total=income - outcome)


@dataclass(frozen=True, slots=True)
class RejectedRow:
    """A source row refused by the validated import path."""

    row: RawTransactionRow
    error: LedgerError


@dataclass(slots=True)
class ImportResult:
    """Outcome of a batch import.

    ``transactions`` are the persisted rows in input order. ``rejected`` is only
    populated when the import ran with per-row validation.
    """

    transactions: list[Transaction] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)


__all__ = [
    "TransactionType",
    "INCOME",
    "OUTCOME",
    "TRANSACTION_TYPES",
    "RawTransactionRow",
    "TransactionInput",
    "Balance",
    "RejectedRow",
    "ImportResult",
]
