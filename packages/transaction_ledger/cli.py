# ruff: noqa: I001
"""CLI for the ``transaction_ledger`` package.

A Typer app wrapping :mod:`transaction_ledger.api`. The root callback loads a
local ``.env`` (without overriding already-set variables) so ``DATABASE_URL``
can live there, then configures package logging. Ledger errors are reported as
``Error: <message>`` on stderr with exit status 1.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from db.models.ledger import Transaction

from .errors import LedgerError
from .logging_setup import configure_logging
from .models import Balance


# ---- Small module-level helpers used by CLI commands -------------------------


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn ledger/config failures into a one-line message and exit status 1."""

    try:
        yield
    except LedgerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        raise typer.Exit(1) from e
    except RuntimeError as e:
        # db.client raises RuntimeError when DATABASE_URL is missing
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e


def _format_transaction(tx: Transaction) -> str:
    return f"{tx.id}\t{tx.type}\t{tx.value}\t{tx.title}\t{tx.category_id}"


def _echo_balance(balance: Balance) -> None:
    typer.echo(f"income\t{balance.income}")
    typer.echo(f"outcome\t{balance.outcome}")
    typer.echo(f"total\t{balance.total}")


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Record income/outcome transactions against categories. "
        "Reads DATABASE_URL from the environment or a local .env."
    ),
)

_DATABASE_URL_HELP = "Override DATABASE_URL (falls back to env var)."

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults). Used by a single command: Typer rewrites Annotated option objects
# in place, so they must not be shared.
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--csv-path",
    help="CSV file with a header row and title,type,value,category columns",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the importer reports missing files itself
)


@app.command("init-db")
def init_db_cmd(
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Create the ledger tables (local/SQLite use; Alembic manages production)."""

    from db import metadata
    from db.client import get_engine

    with _reporting_errors():
        metadata.create_all(bind=get_engine(database_url=database_url))
    typer.echo("Database initialized.")


@app.command("create")
def create_cmd(
    title: Annotated[str, typer.Option("--title", help="Transaction title.")],
    type_: Annotated[str, typer.Option("--type", help="income or outcome.")],
    value: Annotated[str, typer.Option("--value", help="Non-negative amount.")],
    category: Annotated[str, typer.Option("--category", help="Category title.")],
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Create one transaction (outcomes may not exceed the balance)."""

    from .api import create_transaction

    with _reporting_errors():
        tx = create_transaction(title, type_, value, category, database_url=database_url)
    typer.echo(_format_transaction(tx))


@app.command("delete")
def delete_cmd(
    transaction_id: Annotated[str, typer.Option("--id", help="Transaction id.")],
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Delete a transaction by id."""

    from .api import delete_transaction

    with _reporting_errors():
        delete_transaction(transaction_id, database_url=database_url)
    typer.echo(f"Deleted {transaction_id}")


@app.command("import")
def import_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    validate: Annotated[
        bool,
        typer.Option(
            "--validate/--no-validate",
            help="Check type and balance per row; report refused rows instead of failing.",
        ),
    ] = False,
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Import transactions from a CSV file in one unit of work."""

    from .api import import_transactions_from_csv

    with _reporting_errors():
        result = import_transactions_from_csv(
            csv_path, database_url=database_url, validate=validate
        )
    for tx in result.transactions:
        typer.echo(_format_transaction(tx))
    for rejected in result.rejected:
        print(
            f"Rejected line {rejected.row.line} ({rejected.row.title}): {rejected.error.message}",
            file=sys.stderr,
        )
    typer.echo(f"Imported {len(result.transactions)} transactions.")


@app.command("balance")
def balance_cmd(
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Print income, outcome and total."""

    from .api import get_balance

    with _reporting_errors():
        balance = get_balance(database_url=database_url)
    _echo_balance(balance)


@app.command("list")
def list_cmd(
    database_url: Annotated[
        str | None, typer.Option("--database-url", help=_DATABASE_URL_HELP)
    ] = None,
) -> None:
    """Print every transaction followed by the balance."""

    from .api import list_transactions_with_balance

    with _reporting_errors():
        transactions, balance = list_transactions_with_balance(database_url=database_url)
    for tx in transactions:
        typer.echo(_format_transaction(tx))
    _echo_balance(balance)


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level", help="Log level (defaults to $TRANSACTION_LEDGER_LOG_LEVEL or INFO)."
        ),
    ] = None,
) -> None:
    """Root command: load ``.env`` from the CWD and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover - `python -m transaction_ledger.cli`
    app()
