"""Adapter for the receipt ledger ("Incasari") export.

Required header (labels trimmed, marker ``"Nr. crt."``):
``Nr. crt., Data incasarii, Incasare, Tip, Explicatie, Client, Moneda,
Valoare``.

The receipt ledger mixes two kinds of rows that must be told apart before
they mean anything:

- Fiscal Z-report rows: register closings. ``Explicatie`` mentions the
  payment channel (``numerar`` for cash, ``pos``/``card`` for card) and
  ``Incasare`` starts with the Z-report number (e.g. ``"1523 Card"``).
- Receipt rows: manually issued receipts, tagged ``Tip == "Chitanta"``.

Classification is an ordered list of :class:`SaleRule`; the first rule whose
predicate matches owns the row. A matching rule may still reject the row
(e.g. a Z-report row without a number), in which case the row is skipped
rather than offered to later rules. Rows no rule matches are skipped too;
nothing is guessed.

One :class:`Transaction` is emitted per raw row. Folding a cash row and a
card row of the same document into one line happens per day in
:mod:`stock_ledger.ledger`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ...models import ZERO, Transaction, sale_transaction
from ...parsing import cell_text, parse_amount, parse_dotted_date
from ..layout import SALE_LAYOUT, SaleSheetRow
from ..workbook import Grid
from .base import SheetParseResult, logger

FISCAL_KEYWORDS: tuple[str, ...] = ("numerar", "pos", "card")
CASH_KEYWORD = "numerar"
RECEIPT_TAG = "chitanta"

# Z-report numbers in the receipt ledger run two ahead of the register's own
# numbering. Magic business constant; needs domain confirmation before change.
FISCAL_REPORT_OFFSET = 2

_LEADING_INT = re.compile(r"^(\d+)")


class RowRejected(Exception):
    """A rule matched the row but could not build a sale from it."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True, slots=True)
class SaleRule:
    """``matches`` selects rows; ``build`` turns a selected row into a sale."""

    name: str
    matches: Callable[[SaleSheetRow], bool]
    build: Callable[[SaleSheetRow, date, Decimal], Transaction]


def _explanation_lower(row: SaleSheetRow) -> str:
    return cell_text(row.explanation).lower()


def _is_fiscal_report(row: SaleSheetRow) -> bool:
    text = _explanation_lower(row)
    return any(keyword in text for keyword in FISCAL_KEYWORDS)


def _build_fiscal_report(row: SaleSheetRow, on: date, amount: Decimal) -> Transaction:
    reference = cell_text(row.reference)
    match = _LEADING_INT.match(reference)
    if match is None:
        raise RowRejected("could not parse fiscal report number")
    report_no = int(match.group(1))
    is_cash = CASH_KEYWORD in _explanation_lower(row)
    return sale_transaction(
        on,
        f"RF {report_no - FISCAL_REPORT_OFFSET}",
        f"Raport fiscal Z {report_no}",
        cash_value=amount if is_cash else ZERO,
        card_value=ZERO if is_cash else amount,
        source_row=row.row_number,
    )


def _is_receipt(row: SaleSheetRow) -> bool:
    return cell_text(row.type_tag).lower() == RECEIPT_TAG


def _build_receipt(row: SaleSheetRow, on: date, amount: Decimal) -> Transaction:
    client = cell_text(row.client).strip()
    return sale_transaction(
        on,
        cell_text(row.reference),
        f"Chitanta {client}".strip(),
        cash_value=amount,
        source_row=row.row_number,
    )


# Order matters: the two predicates are not known to be mutually exclusive.
SALE_RULES: tuple[SaleRule, ...] = (
    SaleRule("fiscal-report", _is_fiscal_report, _build_fiscal_report),
    SaleRule("receipt", _is_receipt, _build_receipt),
)


def classify_sale(row: SaleSheetRow, on: date, amount: Decimal) -> Transaction | None:
    """Apply :data:`SALE_RULES` to ``row``.

    Returns ``None`` when no rule matches. Raises :class:`RowRejected` when
    the matching rule cannot build a sale.
    """

    for rule in SALE_RULES:
        if rule.matches(row):
            logger.debug("Sales row %d matched rule %s", row.row_number, rule.name)
            return rule.build(row, on, amount)
    return None


def _parse_row(row: SaleSheetRow, result: SheetParseResult) -> None:
    on = parse_dotted_date(row.date)
    if on is None:
        result.skip(row.row_number, "invalid or missing date", date=row.date)
        return

    amount = parse_amount(row.amount)
    if amount is None:
        result.skip(row.row_number, "invalid merchandise value", value=row.amount)
        return

    try:
        tx = classify_sale(row, on, amount)
    except RowRejected as e:
        result.skip(row.row_number, e.reason, reference=cell_text(row.reference))
        return

    if tx is None:
        result.skip(
            row.row_number,
            "unrecognized sale type",
            type_tag=cell_text(row.type_tag),
            explanation=cell_text(row.explanation),
            reference=cell_text(row.reference),
        )
        return
    result.transactions.append(tx)


def parse_sales(grid: Grid) -> SheetParseResult:
    """Parse a receipt-ledger grid into sale :class:`Transaction` values.

    Raises :class:`~stock_ledger.errors.MissingHeaderError` or
    :class:`~stock_ledger.errors.MissingColumnError` before any row is read.
    """

    result = SheetParseResult(sheet=SALE_LAYOUT.sheet)
    for row in SALE_LAYOUT.iter_rows(grid):
        _parse_row(row, result)
    logger.info(
        "Parsed %d sale rows (%d rows skipped)", len(result.transactions), len(result.diagnostics)
    )
    return result


__all__ = [
    "FISCAL_REPORT_OFFSET",
    "RowRejected",
    "SALE_RULES",
    "SaleRule",
    "classify_sale",
    "parse_sales",
]
