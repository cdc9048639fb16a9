from __future__ import annotations

import uuid

import pytest
from db.client import session_scope
from db.models.ledger import Category, Transaction
from transaction_ledger import api
from transaction_ledger.errors import NotFound
from transaction_ledger.transactions import create_transaction, delete_transaction

from tests.helpers.db import count_rows


def test_unknown_id_raises_not_found_and_changes_nothing(storage, session):
    create_transaction(storage, title="Salary", type_="income", value=10, category="Work")

    with pytest.raises(NotFound) as excinfo:
        delete_transaction(storage, str(uuid.uuid4()))

    assert excinfo.value.status_code == 404
    assert excinfo.value.kind == "not_found"
    assert count_rows(session, Transaction) == 1
    assert count_rows(session, Category) == 1


def test_delete_removes_only_that_transaction_and_keeps_category(storage, session):
    keep = create_transaction(storage, title="Salary", type_="income", value=10, category="Work")
    drop = create_transaction(storage, title="Bonus", type_="income", value=5, category="Extra")

    delete_transaction(storage, drop.id)

    assert session.get(Transaction, drop.id) is None
    assert session.get(Transaction, keep.id) is not None
    # Orphaned category is retained
    assert session.get(Category, drop.category_id) is not None


def test_api_delete_commits(db_url):
    tx = api.create_transaction("Salary", "income", 10, "Work", database_url=db_url)

    api.delete_transaction(tx.id, database_url=db_url)

    with session_scope(database_url=db_url) as s:
        assert s.get(Transaction, tx.id) is None
        assert count_rows(s, Category) == 1


def test_api_delete_twice_raises_not_found(db_url):
    tx = api.create_transaction("Salary", "income", 10, "Work", database_url=db_url)
    api.delete_transaction(tx.id, database_url=db_url)

    with pytest.raises(NotFound):
        api.delete_transaction(tx.id, database_url=db_url)
