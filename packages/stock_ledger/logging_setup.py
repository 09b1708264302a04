"""Console logging for the stock ledger.

Every module logs through ``get_logger("stock_ledger.<module>")`` and none of
them attaches handlers. The CLI callback calls :func:`configure_logging`
once; before that the ``stock_ledger`` logger only carries a ``NullHandler``,
so importing the package into another program prints nothing.

The interesting log lines are skipped input rows. Adapters attach the sheet
label and the 1-based row number as ``extra={"sheet": ..., "row": ...}``;
:class:`RowContextFilter` turns that into the ``%(row_context)s`` field of the
default format, e.g. ``[Sales:14]``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "stock_ledger"
LEVEL_ENV_VAR = "STOCK_LEDGER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(row_context)s%(message)s"

_console: logging.Handler | None = None


class RowContextFilter(logging.Filter):
    """Render ``sheet``/``row`` extras as ``row_context`` (empty when absent)."""

    def filter(self, record: logging.LogRecord) -> bool:
        sheet = getattr(record, "sheet", None)
        row = getattr(record, "row", None)
        record.row_context = f"[{sheet}:{row}] " if sheet and row is not None else ""
        return True


def resolve_level(level: int | str | None = None) -> int:
    """``level`` if given, else ``STOCK_LEDGER_LOG_LEVEL``, else INFO.

    Unknown names fall back to INFO rather than failing the run.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Install the console handler on ``stock_ledger``; later calls are no-ops."""

    global _console
    if _console is not None:
        return

    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    resolved = resolve_level(level)
    _console = logging.StreamHandler(stream)
    _console.setLevel(resolved)
    _console.addFilter(RowContextFilter())
    _console.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    pkg.setLevel(resolved)
    pkg.addHandler(_console)
    pkg.propagate = False


def reset_logging() -> None:
    """Remove every handler from ``stock_ledger`` so it can be configured again."""

    global _console
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    _console = None


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _console is None and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["RowContextFilter", "configure_logging", "get_logger", "reset_logging", "resolve_level"]
