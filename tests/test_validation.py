from __future__ import annotations

from decimal import Decimal

import pytest
from transaction_ledger.errors import InsufficientBalance, InvalidType
from transaction_ledger.models import Balance
from transaction_ledger.transactions import create_transaction
from transaction_ledger.validation import check_balance, validate_transaction

from tests.helpers.db import add_transaction
from tests.helpers.storage import RecordingStorage


def test_validate_applies_type_rule_first(storage):
    spy = RecordingStorage(storage)

    with pytest.raises(InvalidType):
        validate_transaction(spy, type_="refund", value=Decimal("1"))

    assert not spy.calls


def test_validate_applies_balance_rule(storage, session):
    add_transaction(session, title="Salary", type_="income", value="10")

    with pytest.raises(InsufficientBalance):
        validate_transaction(storage, type_="outcome", value=Decimal("10.01"))


def test_check_balance_uses_supplied_balance(storage):
    spy = RecordingStorage(storage)
    running = Balance.from_sums(Decimal("5"), Decimal("0"))

    check_balance(spy, type_="outcome", value=Decimal("5"), balance=running)

    assert not spy.calls


def test_income_never_reads_the_balance(storage):
    spy = RecordingStorage(storage)

    check_balance(spy, type_="income", value=Decimal("1000000"))

    assert not spy.calls


def test_create_outcome_reads_balance_once(storage, session):
    add_transaction(session, title="Salary", type_="income", value="100")
    spy = RecordingStorage(storage)

    create_transaction(spy, title="Rent", type_="outcome", value="40", category="Housing")

    # one SUM per transaction type
    assert spy.calls["sum_transactions_by_type"] == 2
