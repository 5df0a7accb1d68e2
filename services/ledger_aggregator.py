"""
services/ledger_aggregator.py
-----------------------------
Income and expense totals over a period.

Each dashboard view reads invoices under its own policy, and the
policies are not interchangeable:

    ALL_TIME_CASH   paid invoices, any date; all expenses.
    MONTHLY_MIXED   invoices issued in the period: all of them are
                    counted, only paid ones are summed; expenses dated
                    in the period.
    ANNUAL_LIMIT    paid invoices issued in the period, summed on
                    total_amount (VAT included); expenses not read.

Expenses always count at cash cost, ``amount + iva_amount``.
"""

from collections import defaultdict
from decimal import Decimal
from enum import Enum
from typing import Optional

from errors import InvalidInput
from models.expense import Expense
from models.invoice import Invoice, InvoiceStatus
from models.reports import CategoryExpense, LedgerTotals
from repositories.expense_repo import ExpenseRepository
from repositories.invoice_repo import InvoiceRepository
from utils.dates import DateRange
from utils.money import HUNDRED, ZERO, money_sum, round2


class FilterPolicy(Enum):
    ALL_TIME_CASH = "all_time_cash"
    MONTHLY_MIXED = "monthly_mixed"
    ANNUAL_LIMIT = "annual_limit"


class LedgerAggregator:
    """Sums invoices and expenses under one of the FilterPolicy rules."""

    def __init__(self, invoice_repo=None, expense_repo=None):
        self.invoice_repo = invoice_repo or InvoiceRepository()
        self.expense_repo = expense_repo or ExpenseRepository()

    def aggregate(self, policy: FilterPolicy, period: Optional[DateRange] = None) -> LedgerTotals:
        """
        Compute totals for a period.

        Args:
            policy: Which filtering rules to apply.
            period: Required for MONTHLY_MIXED and ANNUAL_LIMIT; ignored
                for ALL_TIME_CASH.

        Returns:
            LedgerTotals; an empty period gives all zeros.

        Raises:
            InvalidInput: if a dated policy gets no period.
        """
        policy = FilterPolicy(policy)

        if policy is FilterPolicy.ALL_TIME_CASH:
            paid = self.invoice_repo.query(statuses=[InvoiceStatus.PAID])
            return self._totals(paid, len(paid), self.expense_repo.query())

        if period is None:
            raise InvalidInput(f"Policy {policy.value} needs a period")

        if policy is FilterPolicy.MONTHLY_MIXED:
            issued = self.invoice_repo.query(issue_range=period)
            paid = [inv for inv in issued if inv.is_paid()]
            return self._totals(paid, len(issued), self.expense_repo.query(date_range=period))

        paid = self.invoice_repo.query(statuses=[InvoiceStatus.PAID], issue_range=period)
        return self._totals(paid, len(paid), [])

    def expenses_by_category(self, period: Optional[DateRange] = None) -> list[CategoryExpense]:
        """
        Expense cash cost per category with its share of the total.

        Returns:
            Categories that have expenses, largest total first.
        """
        expenses = self.expense_repo.query(date_range=period)
        grouped: dict[int, list[Expense]] = defaultdict(list)
        for expense in expenses:
            grouped[expense.category_id].append(expense)

        overall = money_sum(e.cash_cost for e in expenses)
        result = []
        for category_id, items in grouped.items():
            total = money_sum(e.cash_cost for e in items)
            result.append(CategoryExpense(
                category_id=category_id,
                category_name=items[0].category_name or str(category_id),
                total_amount=total,
                expense_count=len(items),
                percentage=round2(total / overall * HUNDRED) if overall else ZERO,
            ))
        result.sort(key=lambda c: (-c.total_amount, c.category_name))
        return result

    def outstanding_invoices(self) -> tuple[Decimal, Decimal]:
        """
        What clients still owe, VAT included.

        Returns:
            (sent total, overdue total), both on ``total_amount``.
        """
        unpaid = self.invoice_repo.query(statuses=[InvoiceStatus.SENT, InvoiceStatus.OVERDUE])
        pending = money_sum(i.total_amount for i in unpaid if i.status is InvoiceStatus.SENT)
        overdue = money_sum(i.total_amount for i in unpaid if i.status is InvoiceStatus.OVERDUE)
        return pending, overdue

    @staticmethod
    def _totals(paid: list[Invoice], invoice_count: int, expenses: list[Expense]) -> LedgerTotals:
        return LedgerTotals(
            income=money_sum(i.amount for i in paid),
            vat=money_sum(i.vat_amount for i in paid),
            invoiced_total=money_sum(i.total_amount for i in paid),
            invoice_count=invoice_count,
            expenses=money_sum(e.cash_cost for e in expenses),
            expense_count=len(expenses),
        )
