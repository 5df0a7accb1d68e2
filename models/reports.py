"""
models/reports.py
-----------------
Derived, never-persisted views produced by the dashboard.
Every monetary field is already rounded to cents when the object is built.
"""

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from utils.money import ZERO


def _plain(value):
    """Decimal/date/Enum -> JSON-friendly values, recursively."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _View:
    def to_dict(self) -> dict:
        return _plain(asdict(self))


@dataclass(frozen=True)
class TaxBreakdown(_View):
    taxable_income: Decimal = ZERO
    health_insurance: Decimal = ZERO
    income_for_tax: Decimal = ZERO
    income_tax: Decimal = ZERO
    total_tax_burden: Decimal = ZERO


@dataclass(frozen=True)
class LedgerTotals(_View):
    """
    Sums over one period under one filtering policy.

    Attributes:
        income: Net ``amount`` of paid invoices.
        vat: ``vat_amount`` of paid invoices.
        invoiced_total: ``total_amount`` of paid invoices (amount + vat).
        invoice_count: Invoices counted by the policy (all issued, for monthly views).
        expenses: ``amount + iva_amount`` of expenses.
        expense_count: Number of expenses in the period.
    """
    income: Decimal = ZERO
    vat: Decimal = ZERO
    invoiced_total: Decimal = ZERO
    invoice_count: int = 0
    expenses: Decimal = ZERO
    expense_count: int = 0


@dataclass(frozen=True)
class CategoryExpense(_View):
    category_id: int
    category_name: str
    total_amount: Decimal
    expense_count: int
    percentage: Decimal


@dataclass(frozen=True)
class DashboardSummary(_View):
    total_income: Decimal
    total_vat: Decimal
    total_expenses: Decimal
    taxable_income: Decimal
    health_insurance: Decimal
    income_for_tax: Decimal
    income_tax: Decimal
    total_tax_burden: Decimal
    net_income: Decimal
    pending_invoices: Decimal
    overdue_invoices: Decimal
    invoice_count: int
    expense_count: int


@dataclass(frozen=True)
class MonthlyEstimate(_View):
    month: str
    total_income: Decimal
    total_vat: Decimal
    total_expenses: Decimal
    taxable_income: Decimal
    health_insurance: Decimal
    income_for_tax: Decimal
    income_tax: Decimal
    total_tax_burden: Decimal
    net_income: Decimal
    invoice_count: int
    expense_count: int


@dataclass(frozen=True)
class MonthlyOverview(_View):
    year: int
    month: int
    total_income: Decimal
    total_vat: Decimal
    total_expenses: Decimal
    taxable_income: Decimal
    health_insurance: Decimal
    income_for_tax: Decimal
    income_tax: Decimal
    total_tax_burden: Decimal
    net_income: Decimal
    target_salary: Decimal
    savings: Decimal
    invoice_count: int
    expense_count: int


@dataclass(frozen=True)
class MonthlyDataPoint(_View):
    month: str
    income: Decimal
    expenses: Decimal
    tax: Decimal
    net: Decimal


class LimitStatus(str, Enum):
    SAFE = "safe"
    ATTENTION = "attention"
    CRITICAL = "critical"


@dataclass(frozen=True)
class AnnualLimitStatus(_View):
    year: int
    limit: Decimal
    total_invoiced: Decimal
    remaining: Decimal
    percentage_used: Decimal
    status: LimitStatus
    invoice_count: int
