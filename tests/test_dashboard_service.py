"""Dashboard views composed from the tax engine and the ledger."""
from datetime import date
from decimal import Decimal

import pytest

from conftest import (
    FailingSettingsRepository,
    FakeExpenseRepository,
    FakeInvoiceRepository,
    FakeSettingsRepository,
    make_expense,
    make_invoice,
)
from errors import InvalidInput
from models.invoice import InvoiceStatus
from models.reports import LimitStatus
from models.settings import TaxSettings
from repositories.settings_repo import SettingsRepository
from services.dashboard_service import DashboardService, limit_status

TODAY = date(2026, 10, 17)


def dashboard(invoices=(), expenses=(), settings_repo=None):
    invoice_repo = FakeInvoiceRepository(invoices)
    service = DashboardService(
        settings_repo=settings_repo or FakeSettingsRepository(),
        invoice_repo=invoice_repo,
        expense_repo=FakeExpenseRepository(expenses),
    )
    return service, invoice_repo


class TestSummary:
    @pytest.fixture
    def ledger(self):
        return dashboard(
            [
                make_invoice(1000, date(2026, 9, 1), paid_date=date(2026, 9, 20)),
                make_invoice(500, date(2026, 10, 1), status="sent", vat_rate="22",
                             due_date=date(2026, 12, 1)),
                make_invoice(200, date(2026, 9, 1), status="sent", due_date=date(2026, 10, 1)),
                make_invoice(300, date(2026, 9, 5), status="draft", due_date=date(2026, 10, 10)),
            ],
            [
                make_expense(100, date(2026, 9, 3)),
                make_expense(50, date(2026, 10, 3), iva_included=False, iva_rate="22"),
            ],
        )

    def test_figures(self, ledger):
        service, _ = ledger
        s = service.get_summary(TODAY)
        assert s.total_income == Decimal("1000.00")
        assert s.total_vat == Decimal("0.00")
        assert s.total_expenses == Decimal("161.00")
        assert s.taxable_income == Decimal("670.00")
        assert s.total_tax_burden == Decimal("248.97")
        assert s.net_income == Decimal("590.03")
        assert s.invoice_count == 1
        assert s.expense_count == 2

    def test_sweep_runs_before_receivables(self, ledger):
        service, invoices = ledger
        s = service.get_summary(TODAY)
        assert s.pending_invoices == Decimal("610.00")
        assert s.overdue_invoices == Decimal("500.00")
        assert [i.status for i in invoices.invoices][2:] == [InvoiceStatus.OVERDUE] * 2

    def test_to_dict_is_plain(self, ledger):
        service, _ = ledger
        data = service.get_summary(TODAY).to_dict()
        assert data["net_income"] == 590.03
        assert data["invoice_count"] == 1


class TestMonthlyEstimate:
    def test_paid_summed_all_counted(self):
        service, _ = dashboard([
            make_invoice(1000, date(2026, 10, 2)),
            make_invoice(500, date(2026, 10, 5), status="draft"),
            make_invoice(800, date(2026, 9, 30)),
        ])
        e = service.get_monthly_estimate(TODAY)
        assert e.month == "2026-10"
        assert e.invoice_count == 2
        assert e.total_income == Decimal("1000.00")
        assert e.total_tax_burden == Decimal("248.97")
        assert e.net_income == Decimal("751.03")

    def test_empty_month(self):
        service, _ = dashboard()
        e = service.get_monthly_estimate(TODAY)
        assert e.total_income == Decimal("0.00")
        assert e.net_income == Decimal("0.00")
        assert e.invoice_count == 0


class TestMonthlyOverview:
    @pytest.fixture
    def service(self):
        service, _ = dashboard(
            [make_invoice(1000, date(2026, 9, 1))],
            [make_expense(61, date(2026, 8, 31))],
        )
        return service

    def test_savings_floor_at_zero(self, service):
        o = service.get_monthly_overview(2026, 9)
        assert o.net_income == Decimal("751.03")
        assert o.target_salary == Decimal("3000.00")
        assert o.savings == Decimal("0.00")

    def test_savings_above_target(self, service):
        o = service.get_monthly_overview(2026, 9, target_salary="500")
        assert o.savings == Decimal("251.03")

    def test_savings_exactly_at_target(self, service):
        assert service.get_monthly_overview(2026, 9, target_salary="751.03").savings == Decimal("0.00")

    def test_rate_overrides(self, service):
        o = service.get_monthly_overview(2026, 9, taxable_percentage=78, income_tax_rate=5)
        assert o.health_insurance == Decimal("203.35")
        assert o.total_tax_burden == Decimal("232.18")

    @pytest.mark.parametrize("kwargs", [
        {"year": 1999, "month": 1},
        {"year": 2026, "month": 13},
        {"year": 2026, "month": 9, "target_salary": -1},
        {"year": 2026, "month": 9, "income_tax_rate": 101},
        {"year": 2026, "month": 9, "health_insurance_rate": -0.5},
        {"year": 2026, "month": 9, "taxable_percentage": "abc"},
    ])
    def test_invalid_arguments(self, service, kwargs):
        with pytest.raises(InvalidInput):
            service.get_monthly_overview(**kwargs)

    def test_stored_settings_used(self):
        settings = TaxSettings(target_salary=Decimal("700"))
        service, _ = dashboard(
            [make_invoice(1000, date(2026, 9, 1))],
            settings_repo=FakeSettingsRepository(settings),
        )
        assert service.get_monthly_overview(2026, 9).savings == Decimal("51.03")

    def test_defaults_when_settings_unreadable(self):
        service, _ = dashboard(
            [make_invoice(1000, date(2026, 9, 1))],
            settings_repo=FailingSettingsRepository(),
        )
        o = service.get_monthly_overview(2026, 9)
        assert o.target_salary == Decimal("3000.00")
        assert o.total_tax_burden == Decimal("248.97")

    def test_malformed_stored_setting_keeps_default(self):
        class StoredSettings(SettingsRepository):
            def _fetch_all(self, sql, params=()):
                return [
                    {"setting_key": "taxable_percentage", "setting_value": "67%"},
                    {"setting_key": "target_salary", "setting_value": "700"},
                ]

        service, _ = dashboard(
            [make_invoice(1000, date(2026, 9, 1))],
            settings_repo=StoredSettings(),
        )
        o = service.get_monthly_overview(2026, 9)
        assert o.taxable_income == Decimal("670.00")
        assert o.savings == Decimal("51.03")


class TestSeries:
    def test_oldest_first_with_per_month_tax(self):
        service, _ = dashboard(
            [
                make_invoice(1000, date(2026, 9, 1)),
                make_invoice(400, date(2026, 9, 8), status="sent"),
            ],
            [make_expense(100, date(2026, 10, 1))],
        )
        points = service.get_income_expense_series(3, TODAY)
        assert [p.month for p in points] == ["2026-08", "2026-09", "2026-10"]
        assert points[0].income == Decimal("0.00")
        assert points[1].income == Decimal("1000.00")
        assert points[1].tax == Decimal("248.97")
        assert points[1].net == Decimal("751.03")
        assert points[2].net == Decimal("-100.00")

    def test_settings_loaded_once_per_call(self):
        settings_repo = FakeSettingsRepository()
        service, _ = dashboard(settings_repo=settings_repo)
        service.get_income_expense_series(12, TODAY)
        assert settings_repo.calls == 1

    @pytest.mark.parametrize("months", [0, 25])
    def test_window_bounds(self, months):
        service, _ = dashboard()
        with pytest.raises(InvalidInput):
            service.get_income_expense_series(months, TODAY)


class TestAnnualLimit:
    def test_attention_at_eighty_percent(self):
        service, _ = dashboard([make_invoice(68000, date(2026, 3, 1))])
        s = service.get_annual_limit_status(2026)
        assert s.limit == Decimal("85000.00")
        assert s.total_invoiced == Decimal("68000.00")
        assert s.percentage_used == Decimal("80.00")
        assert s.status is LimitStatus.ATTENTION
        assert s.remaining == Decimal("17000.00")

    def test_vat_counts_towards_the_limit(self):
        service, _ = dashboard([
            make_invoice(50000, date(2026, 3, 1), vat_rate="22"),
            make_invoice(9000, date(2025, 12, 30), paid_date=date(2026, 1, 5)),
            make_invoice(9000, date(2026, 4, 1), status="sent"),
        ])
        s = service.get_annual_limit_status(2026)
        assert s.total_invoiced == Decimal("61000.00")
        assert s.invoice_count == 1
        assert s.percentage_used == Decimal("71.76")

    def test_over_the_limit_is_not_capped(self):
        service, _ = dashboard([make_invoice(90000, date(2026, 3, 1))])
        s = service.get_annual_limit_status(2026)
        assert s.percentage_used == Decimal("105.88")
        assert s.remaining == Decimal("0.00")
        assert s.status is LimitStatus.CRITICAL

    def test_empty_year_is_safe(self):
        service, _ = dashboard()
        s = service.get_annual_limit_status(2026)
        assert s.percentage_used == Decimal("0.00")
        assert s.status is LimitStatus.SAFE

    def test_defaults_to_current_year(self):
        service, _ = dashboard()
        assert service.get_annual_limit_status().year == date.today().year

    @pytest.mark.parametrize("pct, expected", [
        ("69.99", LimitStatus.SAFE),
        ("70", LimitStatus.ATTENTION),
        ("89.99", LimitStatus.ATTENTION),
        ("90", LimitStatus.CRITICAL),
        ("150", LimitStatus.CRITICAL),
    ])
    def test_thresholds(self, pct, expected):
        assert limit_status(Decimal(pct)) is expected

    @pytest.mark.parametrize("amount, shown, expected", [
        ("59499.99", "70.00", LimitStatus.SAFE),
        ("59500", "70.00", LimitStatus.ATTENTION),
        ("76499.99", "90.00", LimitStatus.ATTENTION),
        ("76500", "90.00", LimitStatus.CRITICAL),
    ])
    def test_status_uses_unrounded_share(self, amount, shown, expected):
        service, _ = dashboard([make_invoice(amount, date(2026, 3, 1))])
        s = service.get_annual_limit_status(2026)
        assert s.percentage_used == Decimal(shown)
        assert s.status is expected


def test_expense_by_category():
    service, _ = dashboard(expenses=[
        make_expense(30, date(2026, 10, 1), 1, "Software"),
        make_expense(10, date(2026, 10, 1), 2, "Telefono"),
    ])
    rows = service.get_expense_by_category()
    assert [(r.category_name, r.percentage) for r in rows] == [
        ("Software", Decimal("75.00")),
        ("Telefono", Decimal("25.00")),
    ]
