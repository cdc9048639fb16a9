from __future__ import annotations

import io
from decimal import Decimal
from pathlib import Path

import pytest
from db.client import session_scope
from db.models.ledger import Category, Transaction
from transaction_ledger import api
from transaction_ledger.balance import get_balance
from transaction_ledger.categories import resolve_category
from transaction_ledger.errors import (
    ImportSourceError,
    InsufficientBalance,
    InvalidType,
    PersistenceFailure,
    UnresolvedCategory,
)
from transaction_ledger.importer import import_transactions, import_transactions_from_csv
from transaction_ledger.models import RawTransactionRow

from tests.helpers.db import category_titles, count_rows
from tests.helpers.storage import DroppingCategoryStorage, RecordingStorage

HEADER = "title,type,value,category\n"


def _csv(*lines: str) -> io.StringIO:
    return io.StringIO(HEADER + "".join(line + "\n" for line in lines))


def test_coffee_bonus_snack_scenario(storage, session):
    result = import_transactions_from_csv(
        storage,
        _csv("Coffee,outcome,5,Food", "Bonus,income,50,Work", "Snack,outcome,3,Food"),
    )

    assert category_titles(session) == ["Food", "Work"]
    assert count_rows(session, Transaction) == 3
    coffee, bonus, snack = result.transactions
    assert [t.title for t in result.transactions] == ["Coffee", "Bonus", "Snack"]
    assert coffee.category_id == snack.category_id
    assert bonus.category_id != coffee.category_id
    assert coffee.value == Decimal("5")
    assert result.rejected == []


def test_n_rows_m_new_titles(storage, session):
    resolve_category(storage, "Rent")
    rows = [
        RawTransactionRow("Jan rent", "outcome", "800", "Rent"),
        RawTransactionRow("Feb rent", "outcome", "800", "Rent"),
        RawTransactionRow("Flight", "outcome", "300", "Travel"),
        RawTransactionRow("Hotel", "outcome", "200", "Travel"),
        RawTransactionRow("Paycheck", "income", "3000", "Salary"),
    ]

    result = import_transactions(storage, rows)

    assert count_rows(session, Transaction) == 5
    assert count_rows(session, Category) == 3  # Rent existed; Travel + Salary new
    by_id = {c.id: c.title for c in session.query(Category).all()}
    assert [by_id[t.category_id] for t in result.transactions] == [r.category for r in rows]


def test_bulk_passes_are_fixed(storage):
    spy = RecordingStorage(storage)
    rows = [RawTransactionRow(f"t{i}", "income", "1", f"c{i % 3}") for i in range(30)]

    import_transactions(spy, rows)

    assert spy.calls["find_categories"] == 1
    assert spy.calls["create_categories"] == 1
    assert spy.calls["create_transactions"] == 1
    assert spy.calls["create_transaction"] == 0


def test_trusted_path_skips_balance_check(storage):
    import_transactions_from_csv(storage, _csv("Laptop,outcome,1500,Electronics"))

    assert get_balance(storage).total == Decimal("-1500")


def test_unparseable_value_aborts_before_persistence(storage, session):
    spy = RecordingStorage(storage)

    with pytest.raises(ImportSourceError, match="line 3"):
        import_transactions_from_csv(spy, _csv("Coffee,outcome,5,Food", "Snack,outcome,three,Food"))

    assert not spy.calls
    assert count_rows(session, Category) == 0


def test_short_row_aborts_before_persistence(storage, session):
    with pytest.raises(ImportSourceError):
        import_transactions_from_csv(storage, _csv("Coffee,outcome,5,Food", "Snack,outcome"))

    assert count_rows(session, Category) == 0
    assert count_rows(session, Transaction) == 0


def test_sub_cent_value_aborts_before_persistence(storage, session):
    with pytest.raises(ImportSourceError, match="line 2"):
        import_transactions_from_csv(storage, _csv("Gum,income,0.004,Food"))

    assert count_rows(session, Category) == 0
    assert count_rows(session, Transaction) == 0


def test_non_utf8_file_aborts(storage, session, tmp_path: Path):
    p = tmp_path / "latin1.csv"
    p.write_bytes(b"title,type,value,category\nCaf\xe9,outcome,5,Food\n")

    with pytest.raises(ImportSourceError, match="not valid UTF-8"):
        import_transactions_from_csv(storage, p)

    assert count_rows(session, Transaction) == 0


def test_missing_file_aborts(storage, tmp_path: Path):
    with pytest.raises(ImportSourceError):
        import_transactions_from_csv(storage, tmp_path / "missing.csv")


def test_empty_source_imports_nothing(storage):
    spy = RecordingStorage(storage)

    result = import_transactions_from_csv(spy, io.StringIO(HEADER))

    assert result.transactions == []
    assert not spy.calls


def test_unresolved_category_fails_instead_of_linking_sentinel(session):
    broken = DroppingCategoryStorage(session)

    with pytest.raises(UnresolvedCategory, match="'Food'"):
        import_transactions_from_csv(broken, _csv("Coffee,outcome,5,Food"))

    assert count_rows(session, Transaction) == 0


def test_validated_import_reports_rejected_rows(storage, session):
    result = import_transactions_from_csv(
        storage,
        _csv(
            "Paycheck,income,50,Salary",
            "Groceries,outcome,30,Food",
            "Dinner,outcome,30,Food",  # only 20 left
            "Refund,cashback,5,Misc",
            "Snack,outcome,20,Food",
        ),
        validate=True,
    )

    assert [t.title for t in result.transactions] == ["Paycheck", "Groceries", "Snack"]
    assert [(r.row.title, type(r.error)) for r in result.rejected] == [
        ("Dinner", InsufficientBalance),
        ("Refund", InvalidType),
    ]
    assert result.rejected[0].row.line == 4
    # Categories are only created for accepted rows
    assert category_titles(session) == ["Food", "Salary"]
    assert get_balance(storage).total == Decimal("0")


def test_validated_import_starts_from_current_balance(storage):
    import_transactions_from_csv(storage, _csv("Paycheck,income,100,Salary"))

    result = import_transactions_from_csv(
        storage, _csv("Rent,outcome,100,Housing", "Coffee,outcome,1,Food"), validate=True
    )

    assert [t.title for t in result.transactions] == ["Rent"]
    assert [r.row.title for r in result.rejected] == ["Coffee"]


def test_api_import_is_one_unit_of_work(db_url):
    # Unknown type slips past the trusted path but the CHECK constraint refuses it;
    # the categories created earlier in the same import must roll back too.
    with pytest.raises(PersistenceFailure):
        api.import_transactions_from_csv(
            _csv("Coffee,outcome,5,Food", "Odd,refund,1,Misc"), database_url=db_url
        )

    with session_scope(database_url=db_url) as s:
        assert count_rows(s, Category) == 0
        assert count_rows(s, Transaction) == 0


def test_api_import_from_path_commits(db_url, tmp_path: Path):
    p = tmp_path / "import.csv"
    p.write_text(HEADER + "Coffee,outcome,5,Food\nBonus,income,50,Work\n", encoding="utf-8")

    result = api.import_transactions_from_csv(p, database_url=db_url)

    assert len(result.transactions) == 2
    transactions, balance = api.list_transactions_with_balance(database_url=db_url)
    assert {t.title for t in transactions} == {"Coffee", "Bonus"}
    assert balance.total == Decimal("45")


def test_listing_keeps_import_order(storage):
    titles = [f"Row {i:02d}" for i in range(40)]
    rows = [RawTransactionRow(t, "income", "1", "Misc") for t in titles]

    import_transactions(storage, rows)

    assert [t.title for t in storage.list_transactions()] == titles
