"""
services/dashboard_service.py
-----------------------------
Read views for the dashboard: all-time summary, current month estimate,
arbitrary month overview, income/expense series, annual revenue limit
and expenses by category.

Settings are reloaded on every call and passed explicitly to the tax
engine. Only ``get_summary`` writes, through the overdue sweep.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from config import ANNUAL_REVENUE_LIMIT
from errors import InvalidInput, SettingsUnavailable
from models.reports import (
    AnnualLimitStatus,
    CategoryExpense,
    DashboardSummary,
    LimitStatus,
    MonthlyDataPoint,
    MonthlyEstimate,
    MonthlyOverview,
    TaxBreakdown,
)
from models.settings import TaxSettings
from repositories.settings_repo import SettingsRepository
from services.ledger_aggregator import FilterPolicy, LedgerAggregator
from services.overdue_service import OverdueInvoiceTransitioner
from services.tax_engine import compute_tax_breakdown, net_income
from utils.dates import DateRange, month_label, trailing_months
from utils.logger import get_logger
from utils.money import HUNDRED, ZERO, round2, to_decimal

logger = get_logger(__name__)

ATTENTION_THRESHOLD = Decimal("70")
CRITICAL_THRESHOLD = Decimal("90")


class DashboardService:
    """Composes the tax engine and the ledger into dashboard views."""

    def __init__(
        self,
        settings_repo=None,
        invoice_repo=None,
        expense_repo=None,
        aggregator=None,
        transitioner=None,
    ):
        self.settings_repo = settings_repo or SettingsRepository()
        self.aggregator = aggregator or LedgerAggregator(invoice_repo, expense_repo)
        self.transitioner = transitioner or OverdueInvoiceTransitioner(
            self.aggregator.invoice_repo
        )

    # ── VIEWS ─────────────────────────────────────────────

    def get_summary(self, today: Optional[date] = None) -> DashboardSummary:
        """
        All-time cash view. Runs the overdue sweep first so pending and
        overdue receivables reflect today's status.
        """
        self.transitioner.sweep(today)
        settings = self._load_settings()

        totals = self.aggregator.aggregate(FilterPolicy.ALL_TIME_CASH)
        breakdown = compute_tax_breakdown(totals.income, settings)
        pending, overdue = self.aggregator.outstanding_invoices()

        return DashboardSummary(
            total_income=totals.income,
            total_vat=totals.vat,
            total_expenses=totals.expenses,
            **_breakdown_fields(breakdown),
            net_income=net_income(totals.income, totals.expenses, breakdown),
            pending_invoices=pending,
            overdue_invoices=overdue,
            invoice_count=totals.invoice_count,
            expense_count=totals.expense_count,
        )

    def get_monthly_estimate(self, today: Optional[date] = None) -> MonthlyEstimate:
        """Current month: paid invoices summed, every issued invoice counted."""
        today = today or date.today()
        settings = self._load_settings()

        totals = self.aggregator.aggregate(
            FilterPolicy.MONTHLY_MIXED, DateRange.for_month(today.year, today.month)
        )
        breakdown = compute_tax_breakdown(totals.income, settings)

        return MonthlyEstimate(
            month=month_label(today),
            total_income=totals.income,
            total_vat=totals.vat,
            total_expenses=totals.expenses,
            **_breakdown_fields(breakdown),
            net_income=net_income(totals.income, totals.expenses, breakdown),
            invoice_count=totals.invoice_count,
            expense_count=totals.expense_count,
        )

    def get_monthly_overview(
        self,
        year: int,
        month: int,
        target_salary=None,
        taxable_percentage=None,
        income_tax_rate=None,
        health_insurance_rate=None,
    ) -> MonthlyOverview:
        """
        Month view with optional what-if overrides of the stored settings.

        Args:
            year: 2000..2100.
            month: 1..12.
            target_salary: Monthly take-home goal, >= 0.
            taxable_percentage, income_tax_rate, health_insurance_rate:
                Percentages in 0..100.

        Returns:
            MonthlyOverview; ``savings`` is what exceeds the target salary,
            never negative.

        Raises:
            InvalidInput: on any out-of-range argument.
        """
        period = DateRange.for_month(year, month)
        if target_salary is not None and to_decimal(target_salary, "target_salary") < 0:
            raise InvalidInput("Target salary cannot be negative")
        for name, value in (
            ("taxable_percentage", taxable_percentage),
            ("income_tax_rate", income_tax_rate),
            ("health_insurance_rate", health_insurance_rate),
        ):
            if value is not None and not ZERO <= to_decimal(value, name) <= HUNDRED:
                raise InvalidInput(f"{name} must be between 0 and 100")

        settings = self._load_settings().with_overrides(
            target_salary=target_salary,
            taxable_percentage=taxable_percentage,
            income_tax_rate=income_tax_rate,
            health_insurance_rate=health_insurance_rate,
        )

        totals = self.aggregator.aggregate(FilterPolicy.MONTHLY_MIXED, period)
        breakdown = compute_tax_breakdown(totals.income, settings)
        net = net_income(totals.income, totals.expenses, breakdown)
        target = round2(settings.target_salary)

        return MonthlyOverview(
            year=year,
            month=month,
            total_income=totals.income,
            total_vat=totals.vat,
            total_expenses=totals.expenses,
            **_breakdown_fields(breakdown),
            net_income=net,
            target_salary=target,
            savings=max(ZERO, round2(net - target)),
            invoice_count=totals.invoice_count,
            expense_count=totals.expense_count,
        )

    def get_income_expense_series(
        self, months: int = 6, today: Optional[date] = None
    ) -> list[MonthlyDataPoint]:
        """One point per month for the last ``months`` months, oldest first."""
        settings = self._load_settings()
        points = []
        for period in trailing_months(months, today):
            totals = self.aggregator.aggregate(FilterPolicy.MONTHLY_MIXED, period)
            breakdown = compute_tax_breakdown(totals.income, settings)
            points.append(MonthlyDataPoint(
                month=month_label(period.start),
                income=totals.income,
                expenses=totals.expenses,
                tax=breakdown.total_tax_burden,
                net=net_income(totals.income, totals.expenses, breakdown),
            ))
        return points

    def get_annual_limit_status(self, year: Optional[int] = None) -> AnnualLimitStatus:
        """
        Paid invoicing of a calendar year, VAT included, against the
        regime ceiling.
        """
        year = date.today().year if year is None else year
        totals = self.aggregator.aggregate(FilterPolicy.ANNUAL_LIMIT, DateRange.for_year(year))

        limit = round2(to_decimal(ANNUAL_REVENUE_LIMIT, "ANNUAL_REVENUE_LIMIT"))
        invoiced = totals.invoiced_total
        raw = invoiced / limit * HUNDRED if limit else ZERO

        return AnnualLimitStatus(
            year=year,
            limit=limit,
            total_invoiced=invoiced,
            remaining=max(ZERO, round2(limit - invoiced)),
            percentage_used=round2(raw),
            status=limit_status(raw),
            invoice_count=totals.invoice_count,
        )

    def get_expense_by_category(self, period: Optional[DateRange] = None) -> list[CategoryExpense]:
        return self.aggregator.expenses_by_category(period)

    # ── HELPERS ───────────────────────────────────────────

    def _load_settings(self) -> TaxSettings:
        try:
            return self.settings_repo.get_all()
        except SettingsUnavailable as e:
            logger.warning(f"Settings unavailable, using defaults: {e}")
            return TaxSettings()


def limit_status(percentage_used: Decimal) -> LimitStatus:
    if percentage_used < ATTENTION_THRESHOLD:
        return LimitStatus.SAFE
    if percentage_used < CRITICAL_THRESHOLD:
        return LimitStatus.ATTENTION
    return LimitStatus.CRITICAL


def _breakdown_fields(breakdown: TaxBreakdown) -> dict:
    return {
        "taxable_income": breakdown.taxable_income,
        "health_insurance": breakdown.health_insurance,
        "income_for_tax": breakdown.income_for_tax,
        "income_tax": breakdown.income_tax,
        "total_tax_burden": breakdown.total_tax_burden,
    }
