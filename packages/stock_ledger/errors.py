"""Fatal input errors raised while reading the entry and sale spreadsheets.

Every class here aborts processing of the offending file. Recoverable
per-row problems are never raised; parsers log them and record a
:class:`~stock_ledger.models.RowDiagnostic` instead.
"""

from __future__ import annotations


class LedgerInputError(ValueError):
    """Base class for structural problems that make a whole file unusable."""


class MissingHeaderError(LedgerInputError):
    """No row of the grid contains the sheet's header marker."""

    def __init__(self, marker: str, sheet: str) -> None:
        self.marker = marker
        self.sheet = sheet
        super().__init__(f"{sheet} file does not contain a header row with '{marker}'")


class MissingColumnError(LedgerInputError):
    """The header row lacks one of the sheet's required columns."""

    def __init__(self, column: str, sheet: str) -> None:
        self.column = column
        self.sheet = sheet
        super().__init__(f"{sheet} file is missing required column: {column}")


class UnsupportedWorkbookError(LedgerInputError):
    """The file suffix is not one the grid loader can decode."""

    def __init__(self, path: str, suffix: str) -> None:
        self.path = path
        self.suffix = suffix
        super().__init__(
            f"Unsupported spreadsheet format {suffix or '(none)'!r} for {path}; "
            "expected .xlsx, .xlsm or .csv"
        )


class UnreadableWorkbookError(LedgerInputError):
    """A workbook suffix on a file openpyxl cannot open (corrupt or renamed)."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Could not read workbook {path}: {detail}")


__all__ = [
    "LedgerInputError",
    "MissingColumnError",
    "MissingHeaderError",
    "UnreadableWorkbookError",
    "UnsupportedWorkbookError",
]
