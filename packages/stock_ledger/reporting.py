"""Report-ready views of a built ledger.

Nothing here draws anything. These helpers compute what the printable daily
stock report ("Raport de Gestiune Zilnic") and the summary charts show, so
any renderer (PDF, spreadsheet, web page) consumes the same numbers.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from .models import ZERO, DayLedgerEntry, EntryLine, ExtractedLedger, SaleLine


class ReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous_balance: Decimal
    entries_total: Decimal
    cash_total: Decimal
    card_total: Decimal
    sales_total: Decimal
    final_balance: Decimal


class DailyReport(BaseModel):
    """Content of one daily stock report."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    company_name: str
    previous_balance: Decimal
    entries: tuple[EntryLine, ...]
    sales: tuple[SaleLine, ...]
    summary: ReportSummary


class DailySeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    cash_sales: Decimal
    card_sales: Decimal
    total_sales: Decimal
    entries: Decimal
    balance: Decimal


class SupplierTotal(BaseModel):
    model_config = ConfigDict(frozen=True)

    supplier: str
    total: Decimal


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def build_daily_report(day: DayLedgerEntry, company_name: str) -> DailyReport:
    entries_total = _sum(e.merchandise_value for e in day.entries)
    cash_total = _sum(s.cash_value for s in day.sales)
    card_total = _sum(s.card_value for s in day.sales)
    sales_total = _sum(s.merchandise_value for s in day.sales)
    return DailyReport(
        date=day.date,
        company_name=company_name,
        previous_balance=day.initial_value,
        entries=day.entries,
        sales=day.sales,
        summary=ReportSummary(
            previous_balance=day.initial_value,
            entries_total=entries_total,
            cash_total=cash_total,
            card_total=card_total,
            sales_total=sales_total,
            final_balance=day.initial_value + entries_total - sales_total,
        ),
    )


def build_daily_reports(ledger: ExtractedLedger, company_name: str) -> list[DailyReport]:
    return [build_daily_report(day, company_name) for day in ledger.processed_entries]


def report_filename(day: dt.date) -> str:
    """File stem used for per-day report artifacts, e.g. ``Raport_2024-01-31``."""
    return f"Raport_{day.isoformat()}"


def daily_series(ledger: ExtractedLedger) -> list[DailySeriesPoint]:
    """Per-day points for the cash/card, entries and balance charts."""

    return [
        DailySeriesPoint(
            date=day.date,
            cash_sales=_sum(s.cash_value for s in day.sales),
            card_sales=_sum(s.card_value for s in day.sales),
            total_sales=day.total_sales,
            entries=day.total_value,
            balance=day.final_value,
        )
        for day in ledger.processed_entries
    ]


def supplier_totals(ledger: ExtractedLedger) -> list[SupplierTotal]:
    """Purchase value per supplier, largest first (ties by name)."""

    totals: dict[str, Decimal] = {}
    for day in ledger.processed_entries:
        for line in day.entries:
            totals[line.explanation] = totals.get(line.explanation, ZERO) + line.purchase_value
    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [SupplierTotal(supplier=name, total=total) for name, total in ranked]


def ledger_timespan(ledger: ExtractedLedger) -> tuple[dt.date, dt.date] | None:
    days = ledger.processed_entries
    if not days:
        return None
    return days[0].date, days[-1].date


__all__ = [
    "DailyReport",
    "DailySeriesPoint",
    "ReportSummary",
    "SupplierTotal",
    "build_daily_report",
    "build_daily_reports",
    "daily_series",
    "ledger_timespan",
    "report_filename",
    "supplier_totals",
]
