"""Load an uploaded spreadsheet into a plain grid of cells.

The rest of the package only ever sees ``list[list[CellValue]]``: one list
per sheet row, cells in column order, ``None`` for absent cells. Only the
first worksheet of a workbook is read.

Supported inputs
----------------
- ``.xlsx`` / ``.xlsm`` through :mod:`openpyxl` (``read_only``, cached
  formula values via ``data_only``).
- ``.csv`` through the stdlib :mod:`csv` module (UTF-8, BOM tolerated).
  Empty CSV cells become ``None`` so both sources look alike downstream.

Legacy ``.xls`` files are not decodable by :mod:`openpyxl`; they raise
:class:`~stock_ledger.errors.UnsupportedWorkbookError`.

Files with a workbook suffix that are not actually workbooks (corrupt or
renamed) raise :class:`~stock_ledger.errors.UnreadableWorkbookError`.
"""

from __future__ import annotations

import csv
from datetime import date, datetime
from os import PathLike
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..errors import UnreadableWorkbookError, UnsupportedWorkbookError
from ..logging_setup import get_logger

type CellValue = str | int | float | datetime | date | bool | None
type Grid = list[list[CellValue]]

_WORKBOOK_SUFFIXES = {".xlsx", ".xlsm"}

logger = get_logger("stock_ledger.ingest.workbook")


def _load_workbook_grid(path: Path) -> Grid:
    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError) as e:
        raise UnreadableWorkbookError(str(path), str(e)) from e
    try:
        ws = wb.worksheets[0]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _load_csv_grid(path: Path) -> Grid:
    with path.open(encoding="utf-8-sig", newline="") as f:
        return [[cell if cell != "" else None for cell in row] for row in csv.reader(f)]


def load_grid(path: str | PathLike[str]) -> Grid:
    """Read the first sheet of ``path`` into a grid of raw cells."""

    p = Path(path)
    suffix = p.suffix.lower()
    if suffix in _WORKBOOK_SUFFIXES:
        grid = _load_workbook_grid(p)
    elif suffix == ".csv":
        grid = _load_csv_grid(p)
    else:
        raise UnsupportedWorkbookError(str(p), suffix)
    logger.debug("Loaded %d rows from %s", len(grid), p.name)
    return grid


__all__ = ["CellValue", "Grid", "load_grid"]
