"""Category resolution: map titles to category rows, creating missing ones.

Titles match exactly (case-sensitive, no normalization beyond the trimming the
record source already applies). Resolution costs one lookup and at most one
bulk insert regardless of how many titles are passed.
"""

from __future__ import annotations

from collections.abc import Iterable

from db.models.ledger import Category

from .errors import UnresolvedCategory
from .logging_setup import get_logger
from .storage import LedgerStorage

_logger = get_logger("transaction_ledger.categories")


def _unique_in_order(titles: Iterable[str]) -> list[str]:
    # dict preserves first-occurrence order
    return list(dict.fromkeys(titles))


def resolve_categories(storage: LedgerStorage, titles: Iterable[str]) -> dict[str, Category]:
    """Return ``{title: Category}`` for every distinct title in ``titles``.

    Existing categories are fetched in a single lookup; titles with no match are
    created together in one bulk call, one row per distinct title, in order of
    first occurrence. Duplicates in the input never produce duplicate rows.
    """

    wanted = _unique_in_order(titles)
    if not wanted:
        return {}

    existing = storage.find_categories(set(wanted))
    resolved: dict[str, Category] = {}
    for row in existing:
        # Legacy duplicate titles may exist; the first row returned wins.
        resolved.setdefault(row.title, row)

    missing = [t for t in wanted if t not in resolved]
    if missing:
        created = storage.create_categories(missing)
        for row in created:
            resolved[row.title] = row
        _logger.info("Created %d categories: %s", len(created), ", ".join(missing))

    return resolved


def resolve_category(storage: LedgerStorage, title: str) -> Category:
    """Find-or-create the category named ``title``."""

    row = resolve_categories(storage, [title]).get(title)
    if row is None:
        raise UnresolvedCategory(f"Category {title!r} was not resolved")
    return row


__all__ = [
    "resolve_categories",
    "resolve_category",
]
