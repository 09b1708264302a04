"""Merge, per-day aggregation and running-balance sequencing.

Pipeline::

    merge_transactions(entries, sales)      # one date-sorted list
      -> aggregate_by_day(transactions)     # date -> DayAggregate (no balances)
      -> sequence_balances(days, initial)   # tuple[DayLedgerEntry, ...]

Every stage is a pure function of its inputs, so a ledger can be rebuilt
with a different opening balance from the same :class:`DayAggregate` map
without re-reading any sheet.

Invariants of the output:

- Days are strictly date-ascending, one per distinct input date.
- ``days[0].initial_value`` is the opening balance and
  ``days[n].initial_value == days[n - 1].final_value``.
- ``final_value - initial_value == total_value - total_sales`` per day.
- Within a day, sale lines are unique by ``(document_number, explanation)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .logging_setup import get_logger
from .models import ZERO, DayLedgerEntry, EntryLine, SaleLine, Transaction

logger = get_logger("stock_ledger.ledger")


def merge_transactions(
    entries: Iterable[Transaction], sales: Iterable[Transaction]
) -> list[Transaction]:
    """Concatenate both sources and stable-sort by date."""

    return sorted([*entries, *sales], key=lambda t: t.date)


@dataclass(frozen=True, slots=True)
class DayAggregate:
    """A fully aggregated day, before the running balance is threaded in."""

    date: date
    entries: tuple[EntryLine, ...]
    sales: tuple[SaleLine, ...]
    total_value: Decimal
    total_sales: Decimal

    @property
    def net_change(self) -> Decimal:
        return self.total_value - self.total_sales


@dataclass(slots=True)
class _SaleAccumulator:
    document_number: str
    explanation: str
    cash_value: Decimal = ZERO
    card_value: Decimal = ZERO


@dataclass(slots=True)
class _DayBuilder:
    date: date
    entries: list[Transaction] = field(default_factory=list)
    # Insertion order of the dict is the order lines were first created.
    sales: dict[tuple[str, str], _SaleAccumulator] = field(default_factory=dict)

    def add(self, tx: Transaction) -> None:
        if tx.is_entry:
            self.entries.append(tx)
            return
        acc = self.sales.get(tx.sale_key)
        if acc is None:
            acc = _SaleAccumulator(tx.document_number, tx.explanation)
            self.sales[tx.sale_key] = acc
        acc.cash_value += tx.cash_value
        acc.card_value += tx.card_value

    def build(self) -> DayAggregate:
        entry_lines = tuple(
            EntryLine(
                position=pos,
                document_number=tx.document_number,
                explanation=tx.explanation,
                merchandise_value=tx.merchandise_value,
                purchase_value=tx.purchase_value,
            )
            for pos, tx in enumerate(self.entries, start=1)
        )
        sale_lines = tuple(
            SaleLine(
                position=pos,
                document_number=acc.document_number,
                explanation=acc.explanation,
                cash_value=acc.cash_value,
                card_value=acc.card_value,
                merchandise_value=acc.cash_value + acc.card_value,
            )
            for pos, acc in enumerate(self.sales.values(), start=1)
        )
        return DayAggregate(
            date=self.date,
            entries=entry_lines,
            sales=sale_lines,
            total_value=sum((line.merchandise_value for line in entry_lines), ZERO),
            total_sales=sum((line.merchandise_value for line in sale_lines), ZERO),
        )


def aggregate_by_day(transactions: Iterable[Transaction]) -> dict[date, DayAggregate]:
    """Group transactions by date and fold same-document sales per day.

    Entry lines keep arrival order; sale lines keep first-seen order. Both
    are numbered from 1 within their day.
    """

    builders: dict[date, _DayBuilder] = {}
    for tx in transactions:
        builder = builders.get(tx.date)
        if builder is None:
            builder = builders[tx.date] = _DayBuilder(tx.date)
        builder.add(tx)
    return {day: b.build() for day, b in builders.items()}


def sequence_balances(
    days: Mapping[date, DayAggregate], initial_value: Decimal = ZERO
) -> tuple[DayLedgerEntry, ...]:
    """Thread a running balance through ``days`` in ascending date order."""

    ledger: list[DayLedgerEntry] = []
    balance = initial_value
    for day in sorted(days):
        agg = days[day]
        closing = balance + agg.net_change
        ledger.append(
            DayLedgerEntry(
                date=agg.date,
                initial_value=balance,
                final_value=closing,
                entries=agg.entries,
                sales=agg.sales,
                total_value=agg.total_value,
                total_sales=agg.total_sales,
            )
        )
        balance = closing
    return tuple(ledger)


def build_ledger(
    entries: Iterable[Transaction],
    sales: Iterable[Transaction],
    initial_value: Decimal = ZERO,
) -> tuple[DayLedgerEntry, ...]:
    """Run merge -> aggregate -> sequence over already-parsed transactions."""

    merged = merge_transactions(entries, sales)
    days = aggregate_by_day(merged)
    ledger = sequence_balances(days, initial_value)
    logger.info(
        "Built ledger: %d transactions over %d days (opening %s, closing %s)",
        len(merged),
        len(ledger),
        initial_value,
        ledger[-1].final_value if ledger else initial_value,
    )
    return ledger


__all__ = [
    "DayAggregate",
    "aggregate_by_day",
    "build_ledger",
    "merge_transactions",
    "sequence_balances",
]
