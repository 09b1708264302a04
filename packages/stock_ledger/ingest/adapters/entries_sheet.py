"""Adapter for the merchandise-entry ledger ("Intrari") export.

Required header (labels trimmed, marker ``"Nr. crt"``):
``Nr. crt, Nume furnizor, NIR, Data in stoc, Total vanzare cu TVA``;
``Total achizitie cu TVA`` is optional.

Mapping rules:
- ``document_number``: ``NIR``; rows with an empty ``NIR`` are not entries
  and are dropped without a diagnostic.
- ``date``: ``Data in stoc`` as ``DD.MM.YYYY``; unparseable -> skipped.
- ``explanation``: ``Nume furnizor``.
- ``merchandise_value``: ``Total vanzare cu TVA``; non-numeric -> skipped.
- ``purchase_value``: ``Total achizitie cu TVA``; absent or non-numeric
  falls back to ``0``.
"""

from __future__ import annotations

from ...models import ZERO, entry_transaction
from ...parsing import cell_text, parse_amount, parse_dotted_date
from ..layout import ENTRY_LAYOUT, EntrySheetRow
from ..workbook import Grid
from .base import SheetParseResult, logger


def _parse_row(row: EntrySheetRow, result: SheetParseResult) -> None:
    document = cell_text(row.document).strip()
    if not document:
        return

    on = parse_dotted_date(row.date)
    if on is None:
        result.skip(row.row_number, "invalid or missing date", date=row.date)
        return

    value = parse_amount(row.sale_value)
    if value is None:
        result.skip(row.row_number, "invalid merchandise value", value=row.sale_value)
        return

    purchase = parse_amount(row.purchase_value)
    result.transactions.append(
        entry_transaction(
            on,
            document,
            cell_text(row.supplier).strip(),
            value,
            purchase if purchase is not None else ZERO,
            source_row=row.row_number,
        )
    )


def parse_entries(grid: Grid) -> SheetParseResult:
    """Parse an entry-sheet grid into entry :class:`Transaction` values.

    Raises :class:`~stock_ledger.errors.MissingHeaderError` or
    :class:`~stock_ledger.errors.MissingColumnError` before any row is read.
    """

    result = SheetParseResult(sheet=ENTRY_LAYOUT.sheet)
    for row in ENTRY_LAYOUT.iter_rows(grid):
        _parse_row(row, result)
    logger.info(
        "Parsed %d entries (%d rows skipped)", len(result.transactions), len(result.diagnostics)
    )
    return result


__all__ = ["parse_entries"]
