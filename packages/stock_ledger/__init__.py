"""Public interface for the ``stock_ledger`` package.

This module exposes the package's API functions and public models/types as
the stable import surface. There is no runtime logic here, only symbol
re-exports.
"""

from .api import extract_ledger, extract_ledger_from_grids
from .errors import (
    LedgerInputError,
    MissingColumnError,
    MissingHeaderError,
    UnreadableWorkbookError,
    UnsupportedWorkbookError,
)
from .ingest.adapters.entries_sheet import parse_entries
from .ingest.adapters.sales_sheet import parse_sales
from .ingest.workbook import load_grid
from .ledger import aggregate_by_day, build_ledger, merge_transactions, sequence_balances
from .models import (
    DayLedgerEntry,
    EntryLine,
    ExtractedLedger,
    RowDiagnostic,
    SaleLine,
    Transaction,
)

__all__ = [
    # API
    "extract_ledger",
    "extract_ledger_from_grids",
    "load_grid",
    "parse_entries",
    "parse_sales",
    "merge_transactions",
    "aggregate_by_day",
    "sequence_balances",
    "build_ledger",
    # Models / types
    "Transaction",
    "EntryLine",
    "SaleLine",
    "DayLedgerEntry",
    "ExtractedLedger",
    "RowDiagnostic",
    # Errors
    "LedgerInputError",
    "MissingHeaderError",
    "MissingColumnError",
    "UnreadableWorkbookError",
    "UnsupportedWorkbookError",
]
