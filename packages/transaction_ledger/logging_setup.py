"""Logging configuration for the ``transaction_ledger`` package.

Entry points (the CLI, a host web app) call :func:`configure_logging` once at
startup; library modules only ever call
``get_logger("transaction_ledger.<module>")`` and never attach handlers. Until
configuration runs, the package logger carries a ``NullHandler`` so embedding
applications see no stray output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "transaction_ledger"
LEVEL_ENV_VAR = "TRANSACTION_LEDGER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def resolve_level(level: int | str | None) -> int:
    """Turn ``level`` (int, numeric string or level name) into a logging level.

    ``None`` falls back to ``$TRANSACTION_LEDGER_LOG_LEVEL`` and then ``INFO``.
    Unknown names also resolve to ``INFO``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    mapped = logging.getLevelNamesMapping().get(name)
    return mapped if mapped is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the package logger (idempotent).

    Repeated calls only adjust the level of the already-installed handler.
    """

    global _handler
    resolved = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)

    if _handler is not None:
        _handler.setLevel(resolved)
        logger.setLevel(resolved)
        return

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    # The package handler is the only sink; keep records off the root logger.
    logger.propagate = False
    _handler = handler


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, silencing the package until configured."""

    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "configure_logging",
    "get_logger",
    "resolve_level",
]
