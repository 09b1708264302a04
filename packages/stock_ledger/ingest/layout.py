"""Header location, column resolution and typed row records per sheet layout.

Both exports carry a preamble (company details, report title, blank lines)
above the real header row, so the header is found by scanning for a marker
cell rather than assumed to be the first row. Once found, the header row is
turned into a label -> column index map and checked against the layout's
required columns. From that point on every data row is read through the
layout into a fully-typed record (:class:`EntrySheetRow` or
:class:`SaleSheetRow`), so adapters never deal with missing keys or short
rows.

Contract
--------
- Header marker match is exact: case-sensitive and untrimmed. The entry
  sheet uses ``"Nr. crt"``, the sale sheet ``"Nr. crt."``.
- Column labels are trimmed before matching. When a label repeats, the last
  occurrence wins.
- A missing marker raises :class:`~stock_ledger.errors.MissingHeaderError`;
  a missing required column raises
  :class:`~stock_ledger.errors.MissingColumnError` naming the first absent
  label in declaration order.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from ..errors import MissingColumnError, MissingHeaderError
from ..parsing import cell_text, is_blank
from .workbook import CellValue, Grid


def locate_header(grid: Grid, marker: str, *, sheet: str) -> int:
    """Return the 0-based index of the first row containing ``marker``."""

    for idx, row in enumerate(grid):
        if any(isinstance(cell, str) and cell == marker for cell in row):
            return idx
    raise MissingHeaderError(marker, sheet)


def resolve_columns(
    header_row: Sequence[CellValue], required: Sequence[str], *, sheet: str
) -> dict[str, int]:
    """Map trimmed header labels to column indices and check ``required``."""

    columns: dict[str, int] = {}
    for idx, cell in enumerate(header_row):
        columns[cell_text(cell).strip()] = idx
    for label in required:
        if label not in columns:
            raise MissingColumnError(label, sheet)
    return columns


def _cell(row: Sequence[CellValue], idx: int | None) -> CellValue:
    if idx is None or idx >= len(row):
        return None
    return row[idx]


def _is_empty_row(row: Sequence[CellValue]) -> bool:
    return all(is_blank(cell) for cell in row)


# ---------------------------------------------------------------------------
# Typed row records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EntrySheetRow:
    """One data row of the merchandise-entry sheet, read by column label."""

    row_number: int
    document: CellValue
    supplier: CellValue
    date: CellValue
    sale_value: CellValue
    purchase_value: CellValue


@dataclass(frozen=True, slots=True)
class SaleSheetRow:
    """One data row of the receipt ledger, read by column label."""

    row_number: int
    date: CellValue
    reference: CellValue
    type_tag: CellValue
    explanation: CellValue
    client: CellValue
    currency: CellValue
    amount: CellValue


@dataclass(frozen=True, slots=True)
class SheetLayout[R]:
    """Fixed description of one export layout.

    ``fields`` maps record attribute -> column label. Labels listed in
    ``optional`` may be absent from the header; their cells read as ``None``.
    """

    sheet: str
    marker: str
    fields: Mapping[str, str]
    record: type[R]
    optional: frozenset[str] = frozenset()

    @property
    def required_columns(self) -> list[str]:
        labels = [self.marker]
        labels.extend(lbl for lbl in self.fields.values() if lbl not in self.optional)
        # Preserve declaration order, drop repeats (the marker may be a field).
        return list(dict.fromkeys(labels))

    def iter_rows(self, grid: Grid) -> Iterator[R]:
        """Yield a typed record for every non-empty row below the header.

        Raises the structural errors before yielding anything, so a file
        with a bad header never produces partial rows.
        """

        header_idx = locate_header(grid, self.marker, sheet=self.sheet)
        columns = resolve_columns(grid[header_idx], self.required_columns, sheet=self.sheet)
        indices = {attr: columns.get(label) for attr, label in self.fields.items()}
        return self._records(grid, header_idx, indices)

    def _records(self, grid: Grid, header_idx: int, indices: Mapping[str, int | None]) -> Iterator[R]:
        for i in range(header_idx + 1, len(grid)):
            row = grid[i]
            if not row or _is_empty_row(row):
                continue
            values = {attr: _cell(row, idx) for attr, idx in indices.items()}
            yield self.record(row_number=i + 1, **values)


ENTRY_LAYOUT = SheetLayout(
    sheet="Entries",
    marker="Nr. crt",
    fields={
        "supplier": "Nume furnizor",
        "document": "NIR",
        "date": "Data in stoc",
        "sale_value": "Total vanzare cu TVA",
        "purchase_value": "Total achizitie cu TVA",
    },
    record=EntrySheetRow,
    optional=frozenset({"Total achizitie cu TVA"}),
)

SALE_LAYOUT = SheetLayout(
    sheet="Sales",
    marker="Nr. crt.",
    fields={
        "date": "Data incasarii",
        "reference": "Incasare",
        "type_tag": "Tip",
        "explanation": "Explicatie",
        "client": "Client",
        "currency": "Moneda",
        "amount": "Valoare",
    },
    record=SaleSheetRow,
)


__all__ = [
    "ENTRY_LAYOUT",
    "EntrySheetRow",
    "SALE_LAYOUT",
    "SaleSheetRow",
    "SheetLayout",
    "locate_header",
    "resolve_columns",
]
