"""Pytest configuration for test isolation.

The ``db.client`` engine is process-global and binds to the first
``DATABASE_URL`` it sees. To keep tests hermetic, every test gets its own
file-backed SQLite database under ``tmp_path``; the shared engine is reset
before and after, and ``DATABASE_URL`` points at the fresh file so code paths
that read the environment (the API, the CLI) land there too.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from db.client import get_session, reset_engine
from sqlalchemy.orm import Session
from transaction_ledger.storage import SqlAlchemyLedgerStorage

from tests.helpers.db import bootstrap_sqlite_db


@pytest.fixture(autouse=True)
def db_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Per-test SQLite database URL, also exported as ``DATABASE_URL``."""

    url = bootstrap_sqlite_db(tmp_path / "ledger.db")
    monkeypatch.setenv("DATABASE_URL", url)
    yield url
    reset_engine()


@pytest.fixture
def session(db_url: str) -> Iterator[Session]:
    """An open session; uncommitted work is discarded at teardown."""

    s = get_session(database_url=db_url)
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def storage(session: Session) -> SqlAlchemyLedgerStorage:
    return SqlAlchemyLedgerStorage(session)
