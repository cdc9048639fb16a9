# ruff: noqa: I001
"""Ledger core tables.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations  # ruff: noqa: I001

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # ledger_categories
    op.create_table(
        "ledger_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    # Plain (non-unique) index: title uniqueness is resolved in the service layer.
    op.create_index("ix_ledger_categories_title", "ledger_categories", ["title"])

    # ledger_transactions
    op.create_table(
        "ledger_transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("value", sa.Numeric(18, 2), nullable=False),
        sa.Column(
            "category_id",
            sa.String(36),
            sa.ForeignKey("ledger_categories.id"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("type in ('income','outcome')", name="ck_ledger_tx_type"),
        sa.CheckConstraint("value >= 0", name="ck_ledger_tx_value_non_negative"),
    )
    op.create_index(
        "ix_ledger_transactions_category_id", "ledger_transactions", ["category_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_ledger_transactions_category_id", table_name="ledger_transactions")
    op.drop_table("ledger_transactions")
    op.drop_index("ix_ledger_categories_title", table_name="ledger_categories")
    op.drop_table("ledger_categories")
