from datetime import date, timedelta
from decimal import Decimal
from random import Random

from stock_ledger.ledger import aggregate_by_day, build_ledger, merge_transactions, sequence_balances
from stock_ledger.models import entry_transaction, sale_transaction

D = Decimal
JAN1 = date(2024, 1, 1)
JAN2 = date(2024, 1, 2)


def test_merge_sorts_by_date_and_keeps_same_day_order():
    e1 = entry_transaction(JAN2, "N1", "A", D("1"))
    e2 = entry_transaction(JAN1, "N2", "B", D("2"))
    s1 = sale_transaction(JAN1, "RF 1", "Z", cash_value=D("3"))
    merged = merge_transactions([e1, e2], [s1])
    assert merged == [e2, s1, e1]


def test_entries_numbered_in_arrival_order():
    days = aggregate_by_day(
        [
            entry_transaction(JAN1, "N1", "A", D("10"), D("8")),
            entry_transaction(JAN1, "N2", "B", D("5")),
        ]
    )
    day = days[JAN1]
    assert [(e.position, e.document_number, e.purchase_value) for e in day.entries] == [
        (1, "N1", D("8")),
        (2, "N2", D("0")),
    ]
    assert day.total_value == D("15")
    assert day.total_sales == D("0")


def test_same_day_same_document_sales_are_folded():
    days = aggregate_by_day(
        [
            sale_transaction(JAN1, "RF 1521", "Raport fiscal Z 1523", cash_value=D("30")),
            sale_transaction(JAN1, "ATM1", "Chitanta Ion", cash_value=D("7")),
            sale_transaction(JAN1, "RF 1521", "Raport fiscal Z 1523", card_value=D("20")),
            sale_transaction(JAN1, "RF 1521", "Raport fiscal Z 1523", cash_value=D("1.5")),
        ]
    )
    first, second = days[JAN1].sales
    assert (first.position, first.document_number) == (1, "RF 1521")
    assert first.cash_value == D("31.5")
    assert first.card_value == D("20")
    assert first.merchandise_value == D("51.5")
    assert (second.position, second.document_number, second.merchandise_value) == (2, "ATM1", D("7"))
    assert days[JAN1].total_sales == D("58.5")


def test_same_document_on_different_days_stays_separate():
    days = aggregate_by_day(
        [
            sale_transaction(JAN1, "RF 8", "Raport fiscal Z 10", cash_value=D("3")),
            sale_transaction(JAN2, "RF 8", "Raport fiscal Z 10", cash_value=D("4")),
        ]
    )
    assert [len(days[d].sales) for d in (JAN1, JAN2)] == [1, 1]
    assert days[JAN2].sales[0].cash_value == D("4")


def test_explanation_is_part_of_sale_identity():
    days = aggregate_by_day(
        [
            sale_transaction(JAN1, "ATM1", "Chitanta Ion", cash_value=D("3")),
            sale_transaction(JAN1, "ATM1", "Chitanta Maria", cash_value=D("4")),
        ]
    )
    assert [s.explanation for s in days[JAN1].sales] == ["Chitanta Ion", "Chitanta Maria"]


def test_sequence_threads_balance_in_date_order():
    days = aggregate_by_day(
        [
            entry_transaction(JAN2, "N2", "B", D("40")),
            entry_transaction(JAN1, "N1", "A", D("100")),
            sale_transaction(JAN1, "RF 1", "Z 3", cash_value=D("30")),
        ]
    )
    ledger = sequence_balances(days, D("50"))
    assert [d.date for d in ledger] == [JAN1, JAN2]
    assert (ledger[0].initial_value, ledger[0].final_value) == (D("50"), D("120"))
    assert (ledger[1].initial_value, ledger[1].final_value) == (D("120"), D("160"))


def test_same_days_can_be_resequenced_with_another_opening_balance():
    days = aggregate_by_day([entry_transaction(JAN1, "N1", "A", D("10"))])
    assert sequence_balances(days, D("0"))[0].final_value == D("10")
    assert sequence_balances(days, D("-5"))[0].final_value == D("5")


def test_empty_input_builds_empty_ledger():
    assert build_ledger([], [], D("12")) == ()


def test_end_to_end_numerar_and_card_do_not_fold():
    entries = [entry_transaction(JAN1, "N1", "Furnizor", D("100"))]
    sales = [
        sale_transaction(JAN1, "RF 8", "Raport fiscal Z 10", cash_value=D("30")),
        sale_transaction(JAN1, "RF 8", "Raport fiscal Z 10", card_value=D("20")),
    ]
    (day,) = build_ledger(entries, sales, D("50"))
    assert day.initial_value == D("50")
    assert day.total_value == D("100")
    assert day.total_sales == D("50")
    assert day.final_value == D("100")


def test_randomized_balance_invariants():
    rng = Random(20240101)
    for _ in range(25):
        opening = D(rng.randint(-1000, 1000)) / 4
        entries = []
        sales = []
        for _ in range(rng.randint(0, 40)):
            on = JAN1 + timedelta(days=rng.randint(0, 9))
            amount = D(rng.randint(-500, 5000)) / 100
            if rng.random() < 0.4:
                entries.append(entry_transaction(on, f"N{rng.randint(1, 5)}", "F", amount))
            elif rng.random() < 0.5:
                sales.append(sale_transaction(on, f"RF {rng.randint(1, 3)}", "Z", cash_value=amount))
            else:
                sales.append(sale_transaction(on, f"RF {rng.randint(1, 3)}", "Z", card_value=amount))

        ledger = build_ledger(entries, sales, opening)

        assert len(ledger) == len({t.date for t in entries + sales})
        if ledger:
            assert ledger[0].initial_value == opening
        for prev, cur in zip(ledger, ledger[1:]):
            assert prev.date < cur.date
            assert cur.initial_value == prev.final_value
        for day in ledger:
            assert day.final_value - day.initial_value == day.total_value - day.total_sales
            assert day.total_value == sum((e.merchandise_value for e in day.entries), D("0"))
            assert day.total_sales == sum((s.merchandise_value for s in day.sales), D("0"))
            keys = [(s.document_number, s.explanation) for s in day.sales]
            assert len(keys) == len(set(keys))
            for s in day.sales:
                assert s.merchandise_value == s.cash_value + s.card_value
        expected_sales = sum((s.cash_value + s.card_value for s in sales), D("0"))
        assert sum((d.total_sales for d in ledger), D("0")) == expected_sales
