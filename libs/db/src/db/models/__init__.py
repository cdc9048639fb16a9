"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the ledger models used by ``transaction_ledger``.
"""

from .ledger import Base, Category, Transaction

__all__ = [
    "Base",
    "Category",
    "Transaction",
]
