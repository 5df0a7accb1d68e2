"""Filtering policies of the ledger aggregator."""
from datetime import date
from decimal import Decimal

import pytest

from conftest import FakeExpenseRepository, FakeInvoiceRepository, make_expense, make_invoice
from errors import InvalidInput
from models.reports import LedgerTotals
from services.ledger_aggregator import FilterPolicy, LedgerAggregator
from utils.dates import DateRange

OCTOBER = DateRange.for_month(2026, 10)


def aggregator(invoices=(), expenses=()):
    return LedgerAggregator(FakeInvoiceRepository(invoices), FakeExpenseRepository(expenses))


class TestAllTimeCash:
    def test_only_paid_invoices_any_date(self):
        agg = aggregator([
            make_invoice(1000, date(2024, 3, 1)),
            make_invoice(250, date(2026, 10, 1), vat_rate="22"),
            make_invoice(999, date(2026, 10, 2), status="sent"),
            make_invoice(500, date(2026, 10, 3), status="overdue"),
        ])
        totals = agg.aggregate(FilterPolicy.ALL_TIME_CASH)
        assert totals.income == Decimal("1250.00")
        assert totals.vat == Decimal("55.00")
        assert totals.invoiced_total == Decimal("1305.00")
        assert totals.invoice_count == 2

    def test_all_expenses_at_cash_cost(self):
        agg = aggregator(expenses=[
            make_expense(100, date(2020, 1, 1)),
            make_expense(50, date(2026, 10, 1), iva_included=False, iva_rate="22"),
        ])
        totals = agg.aggregate(FilterPolicy.ALL_TIME_CASH)
        assert totals.expenses == Decimal("161.00")
        assert totals.expense_count == 2

    def test_empty_ledger_gives_zeros(self):
        assert aggregator().aggregate(FilterPolicy.ALL_TIME_CASH) == LedgerTotals()


class TestMonthlyMixed:
    def test_draft_counted_but_not_summed(self):
        agg = aggregator([
            make_invoice(1000, date(2026, 10, 2)),
            make_invoice(500, date(2026, 10, 5), status="draft"),
        ])
        totals = agg.aggregate(FilterPolicy.MONTHLY_MIXED, OCTOBER)
        assert totals.invoice_count == 2
        assert totals.income == Decimal("1000.00")

    def test_period_is_by_issue_date_not_paid_date(self):
        agg = aggregator([
            make_invoice(700, date(2026, 9, 28), paid_date=date(2026, 10, 3)),
            make_invoice(300, date(2026, 10, 30), paid_date=date(2026, 11, 2)),
        ])
        totals = agg.aggregate(FilterPolicy.MONTHLY_MIXED, OCTOBER)
        assert totals.income == Decimal("300.00")
        assert totals.invoice_count == 1

    def test_expenses_limited_to_period(self):
        agg = aggregator(expenses=[
            make_expense(40, date(2026, 9, 30)),
            make_expense(60, date(2026, 10, 1)),
            make_expense(20, date(2026, 10, 31), iva_included=False, iva_rate="10"),
        ])
        totals = agg.aggregate(FilterPolicy.MONTHLY_MIXED, OCTOBER)
        assert totals.expenses == Decimal("82.00")
        assert totals.expense_count == 2

    def test_empty_month_gives_zeros(self):
        agg = aggregator([make_invoice(1000, date(2026, 9, 2))])
        assert agg.aggregate(FilterPolicy.MONTHLY_MIXED, OCTOBER) == LedgerTotals()

    def test_needs_a_period(self):
        with pytest.raises(InvalidInput):
            aggregator().aggregate(FilterPolicy.MONTHLY_MIXED)


class TestAnnualLimit:
    def test_sums_total_amount_of_paid_invoices_issued_in_year(self):
        agg = aggregator(
            [
                make_invoice(1000, date(2026, 2, 1), vat_rate="22"),
                make_invoice(2000, date(2026, 6, 1), status="sent"),
                make_invoice(5000, date(2025, 12, 20), paid_date=date(2026, 1, 10)),
            ],
            [make_expense(100, date(2026, 3, 1))],
        )
        totals = agg.aggregate(FilterPolicy.ANNUAL_LIMIT, DateRange.for_year(2026))
        assert totals.invoiced_total == Decimal("1220.00")
        assert totals.income == Decimal("1000.00")
        assert totals.invoice_count == 1
        assert totals.expenses == Decimal("0.00")
        assert totals.expense_count == 0

    def test_policy_accepts_its_value(self):
        totals = aggregator().aggregate("annual_limit", DateRange.for_year(2026))
        assert totals.invoiced_total == Decimal("0.00")


class TestExpensesByCategory:
    def test_totals_shares_and_order(self):
        agg = aggregator(expenses=[
            make_expense(25, date(2026, 10, 1), 1, "Software"),
            make_expense(50, date(2026, 10, 2), 2, "Formazione"),
            make_expense(25, date(2026, 10, 3), 2, "Formazione"),
        ])
        rows = agg.expenses_by_category()
        assert [r.category_name for r in rows] == ["Formazione", "Software"]
        assert rows[0].total_amount == Decimal("75.00")
        assert rows[0].expense_count == 2
        assert rows[0].percentage == Decimal("75.00")
        assert rows[1].percentage == Decimal("25.00")

    def test_no_expenses(self):
        assert aggregator().expenses_by_category() == []


def test_outstanding_invoices_use_total_amount():
    agg = aggregator([
        make_invoice(500, date(2026, 9, 1), status="sent", vat_rate="22"),
        make_invoice(200, date(2026, 8, 1), status="overdue"),
        make_invoice(300, date(2026, 8, 1), status="draft"),
        make_invoice(900, date(2026, 8, 1)),
    ])
    assert agg.outstanding_invoices() == (Decimal("610.00"), Decimal("200.00"))
