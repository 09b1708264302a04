"""Data models for the stock ledger.

Two families live here:

- :class:`Transaction`: the normalized, pre-aggregation row emitted by the
  sheet adapters. It is a frozen ``dataclass`` so adapters can build many of
  them cheaply and the pipeline can treat them as values.
- Output DTOs (``EntryLine``, ``SaleLine``, ``DayLedgerEntry``,
  ``ExtractedLedger``, ``RowDiagnostic``): pydantic models handed to the
  reporting layer. They are frozen after construction and serialize to JSON
  with dates in ``YYYY-MM-DD`` form and amounts as decimal strings.

Amounts are :class:`decimal.Decimal` throughout so day totals and running
balances never pick up binary float drift.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

type TransactionKind = Literal["entry", "sale"]

ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single normalized row from either the entry or the sale sheet.

    Entries carry ``merchandise_value`` and ``purchase_value``; sales carry
    ``cash_value`` and ``card_value`` (their merchandise value is recomputed
    after same-day consolidation, so it is left at zero here).
    """

    kind: TransactionKind
    date: dt.date
    document_number: str
    explanation: str
    merchandise_value: Decimal = ZERO
    purchase_value: Decimal = ZERO
    cash_value: Decimal = ZERO
    card_value: Decimal = ZERO
    # 1-based row within the source grid; 0 when built programmatically.
    source_row: int = 0

    @property
    def is_entry(self) -> bool:
        return self.kind == "entry"

    @property
    def sale_key(self) -> tuple[str, str]:
        """Identity used to fold same-day sale rows into one line."""
        return (self.document_number, self.explanation)


def entry_transaction(
    on: dt.date,
    document_number: str,
    explanation: str,
    merchandise_value: Decimal,
    purchase_value: Decimal = ZERO,
    *,
    source_row: int = 0,
) -> Transaction:
    return Transaction(
        kind="entry",
        date=on,
        document_number=document_number,
        explanation=explanation,
        merchandise_value=merchandise_value,
        purchase_value=purchase_value,
        source_row=source_row,
    )


def sale_transaction(
    on: dt.date,
    document_number: str,
    explanation: str,
    *,
    cash_value: Decimal = ZERO,
    card_value: Decimal = ZERO,
    source_row: int = 0,
) -> Transaction:
    return Transaction(
        kind="sale",
        date=on,
        document_number=document_number,
        explanation=explanation,
        cash_value=cash_value,
        card_value=card_value,
        source_row=source_row,
    )


# ---------------------------------------------------------------------------
# Output DTOs (consumed read-only by reporting)
# ---------------------------------------------------------------------------


class EntryLine(BaseModel):
    """One merchandise entry shown under a day, numbered ``1..n``."""

    model_config = ConfigDict(frozen=True)

    position: int
    document_number: str
    explanation: str
    merchandise_value: Decimal
    purchase_value: Decimal = ZERO


class SaleLine(BaseModel):
    """One consolidated sale line for a day.

    ``merchandise_value`` is always ``cash_value + card_value``.
    """

    model_config = ConfigDict(frozen=True)

    position: int
    document_number: str
    explanation: str
    cash_value: Decimal
    card_value: Decimal
    merchandise_value: Decimal


class DayLedgerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    initial_value: Decimal
    final_value: Decimal
    entries: tuple[EntryLine, ...] = ()
    sales: tuple[SaleLine, ...] = ()
    total_value: Decimal = ZERO
    total_sales: Decimal = ZERO


class RowDiagnostic(BaseModel):
    """A skipped input row, kept for audit rather than shown as an error."""

    model_config = ConfigDict(frozen=True)

    sheet: str
    row: int
    reason: str
    values: dict[str, str] = Field(default_factory=dict)


class ExtractedLedger(BaseModel):
    """Everything the reporting layer receives for one reconciliation run."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[Transaction, ...] = ()
    sales: tuple[Transaction, ...] = ()
    processed_entries: tuple[DayLedgerEntry, ...] = ()
    diagnostics: tuple[RowDiagnostic, ...] = ()


__all__ = [
    "DayLedgerEntry",
    "EntryLine",
    "ExtractedLedger",
    "RowDiagnostic",
    "SaleLine",
    "Transaction",
    "TransactionKind",
    "ZERO",
    "entry_transaction",
    "sale_transaction",
]
