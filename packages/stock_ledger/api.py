"""Public entry points: from spreadsheets (or grids) to an :class:`ExtractedLedger`.

The two sheets are parsed independently and only merged once both parses
have succeeded. A structural error in either file
(:class:`~stock_ledger.errors.LedgerInputError`) aborts the whole extraction;
no partial ledger is produced. Either file may be omitted, in which case it
contributes no transactions.
"""

from __future__ import annotations

from decimal import Decimal
from os import PathLike

from .ingest.adapters.entries_sheet import parse_entries
from .ingest.adapters.sales_sheet import parse_sales
from .ingest.workbook import Grid, load_grid
from .ledger import build_ledger
from .logging_setup import get_logger
from .models import ZERO, ExtractedLedger

logger = get_logger("stock_ledger.api")

type SheetPath = str | PathLike[str]


def extract_ledger_from_grids(
    entries_grid: Grid | None,
    sales_grid: Grid | None,
    initial_value: Decimal = ZERO,
) -> ExtractedLedger:
    """Build the ledger from already-decoded sheet grids."""

    results = []
    if entries_grid is not None:
        results.append(parse_entries(entries_grid))
    if sales_grid is not None:
        results.append(parse_sales(sales_grid))

    entry_txs = [tx for r in results for tx in r.transactions if tx.is_entry]
    sale_txs = [tx for r in results for tx in r.transactions if not tx.is_entry]
    diagnostics = [d for r in results for d in r.diagnostics]

    return ExtractedLedger(
        entries=tuple(entry_txs),
        sales=tuple(sale_txs),
        processed_entries=build_ledger(entry_txs, sale_txs, initial_value),
        diagnostics=tuple(diagnostics),
    )


def extract_ledger(
    entries_path: SheetPath | None,
    sales_path: SheetPath | None,
    initial_value: Decimal = ZERO,
) -> ExtractedLedger:
    """Read the entry and sale spreadsheets and build the daily ledger.

    Parameters
    ----------
    entries_path:
        Merchandise-entry export (``.xlsx``/``.xlsm``/``.csv``) or ``None``.
    sales_path:
        Receipt-ledger export or ``None``.
    initial_value:
        Stock balance carried into the first day.
    """

    logger.info("Extracting ledger (opening balance %s)", initial_value)
    entries_grid = load_grid(entries_path) if entries_path is not None else None
    sales_grid = load_grid(sales_path) if sales_path is not None else None
    return extract_ledger_from_grids(entries_grid, sales_grid, initial_value)


__all__ = ["extract_ledger", "extract_ledger_from_grids"]
