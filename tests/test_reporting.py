from datetime import date
from decimal import Decimal

from stock_ledger import extract_ledger_from_grids
from stock_ledger.reporting import (
    build_daily_report,
    build_daily_reports,
    daily_series,
    ledger_timespan,
    report_filename,
    supplier_totals,
)

D = Decimal
ENTRY_HEADER = [
    "Nr. crt",
    "Nume furnizor",
    "NIR",
    "Data in stoc",
    "Total vanzare cu TVA",
    "Total achizitie cu TVA",
]
SALE_HEADER = ["Nr. crt.", "Data incasarii", "Incasare", "Tip", "Explicatie", "Client", "Moneda", "Valoare"]


def _ledger():
    entries = [
        ENTRY_HEADER,
        [1, "Furnizor A", "N1", "01.01.2024", 100, 70],
        [2, "Furnizor B", "N2", "01.01.2024", 50, 40],
        [3, "Furnizor A", "N3", "03.01.2024", 20, 15],
    ]
    sales = [
        SALE_HEADER,
        [1, "01.01.2024", "10", "", "Numerar", None, "RON", 30],
        [2, "01.01.2024", "10", "", "POS", None, "RON", 20],
        [3, "03.01.2024", "ATM1", "Chitanta", "Avans", "Ion", "RON", 5],
    ]
    return extract_ledger_from_grids(entries, sales, D("10"))


def test_daily_report_matches_ledger_day():
    ledger = _ledger()
    report = build_daily_report(ledger.processed_entries[0], "SC Magazin SRL")
    assert report.date == date(2024, 1, 1)
    assert report.company_name == "SC Magazin SRL"
    assert report.previous_balance == D("10")
    assert [e.document_number for e in report.entries] == ["N1", "N2"]
    (sale,) = report.sales
    assert (sale.cash_value, sale.card_value, sale.merchandise_value) == (D("30"), D("20"), D("50"))
    s = report.summary
    assert (s.entries_total, s.cash_total, s.card_total, s.sales_total) == (D("150"), D("30"), D("20"), D("50"))
    assert s.final_balance == D("110") == ledger.processed_entries[0].final_value


def test_one_report_per_day():
    reports = build_daily_reports(_ledger(), "X")
    assert [r.date for r in reports] == [date(2024, 1, 1), date(2024, 1, 3)]
    assert reports[1].previous_balance == reports[0].summary.final_balance
    assert report_filename(reports[1].date) == "Raport_2024-01-03"


def test_daily_series():
    points = daily_series(_ledger())
    assert [(p.cash_sales, p.card_sales, p.total_sales, p.entries, p.balance) for p in points] == [
        (D("30"), D("20"), D("50"), D("150"), D("110")),
        (D("5"), D("0"), D("5"), D("20"), D("125")),
    ]


def test_supplier_totals_ranked_by_purchase_value():
    totals = supplier_totals(_ledger())
    assert [(t.supplier, t.total) for t in totals] == [("Furnizor A", D("85")), ("Furnizor B", D("40"))]


def test_timespan():
    assert ledger_timespan(_ledger()) == (date(2024, 1, 1), date(2024, 1, 3))
    assert ledger_timespan(extract_ledger_from_grids(None, None)) is None
