"""
Shared fixtures for the bookkeeping test suite.

Repositories are replaced by in-memory fakes that apply the same filters
and ordering as the SQL, so services run unchanged without a database.
"""
import copy
from datetime import date, datetime, timedelta

import pytest

from errors import SettingsUnavailable
from models.client import Client
from models.expense import Expense
from models.invoice import Invoice, InvoiceStatus
from models.settings import TaxSettings

TODAY = date(2026, 10, 17)


class FakeInvoiceRepository:
    def __init__(self, invoices=()):
        self.invoices = list(invoices)
        for i, invoice in enumerate(self.invoices, start=1):
            if invoice.id is None:
                invoice.id = i
        self.status_calls = []

    def query(self, statuses=None, issue_range=None, paid_range=None):
        wanted = None if statuses is None else {InvoiceStatus(s) for s in statuses}
        result = [
            inv for inv in self.invoices
            if (wanted is None or inv.status in wanted)
            and (issue_range is None or issue_range.contains(inv.issue_date))
            and (paid_range is None or paid_range.contains(inv.paid_date))
        ]
        return sorted(result, key=lambda inv: (inv.issue_date, inv.id), reverse=True)

    def set_status(self, invoice_id, status, paid_date=None):
        self.status_calls.append((invoice_id, InvoiceStatus(status)))
        for inv in self.invoices:
            if inv.id == invoice_id:
                inv.status = InvoiceStatus(status)
                if inv.status is InvoiceStatus.PAID:
                    inv.paid_date = paid_date or TODAY
                return True
        return False


class FakeExpenseRepository:
    def __init__(self, expenses=()):
        self.expenses = list(expenses)

    def query(self, date_range=None):
        return [
            e for e in self.expenses
            if date_range is None or date_range.contains(e.expense_date)
        ]


class FakeClientRepository:
    def __init__(self, clients=()):
        self.clients = {c.id: c for c in clients}

    def get_by_id(self, client_id):
        return self.clients.get(client_id)

    def get_all(self):
        return sorted(self.clients.values(), key=lambda c: c.name)


class FakeWorkedHoursRepository:
    """Stores copies, like a database would."""

    def __init__(self):
        self.rows = {}
        self._next_id = 1
        self._clock = datetime(2026, 10, 1, 9, 0)

    def insert(self, entry):
        entry.id = self._next_id
        entry.created_at = self._clock
        self._next_id += 1
        self._clock += timedelta(minutes=1)
        self.rows[entry.id] = copy.copy(entry)
        return entry

    def get_by_id(self, entry_id):
        row = self.rows.get(entry_id)
        return copy.copy(row) if row else None

    def query(self, date_range=None, client_id=None, newest_first=False):
        result = [
            copy.copy(e) for e in self.rows.values()
            if (date_range is None or date_range.contains(e.worked_date))
            and (client_id is None or e.client_id == client_id)
        ]
        return sorted(
            result,
            key=lambda e: (e.worked_date, e.created_at, e.id),
            reverse=newest_first,
        )

    def update(self, entry):
        if entry.id not in self.rows:
            return False
        self.rows[entry.id] = copy.copy(entry)
        return True

    def delete(self, entry_id):
        return self.rows.pop(entry_id, None) is not None


class FakeSettingsRepository:
    def __init__(self, settings=None):
        self.settings = settings or TaxSettings()
        self.calls = 0

    def get_all(self):
        self.calls += 1
        return self.settings


class FailingSettingsRepository:
    def get_all(self):
        raise SettingsUnavailable("relation \"settings\" does not exist")


# ── Factories ──────────────────────────────────────────────

def make_invoice(amount, issue_date, status="paid", vat_rate="0", due_date=None,
                 paid_date=None, number=None):
    status = InvoiceStatus(status)
    if status is InvoiceStatus.PAID and paid_date is None:
        paid_date = issue_date
    return Invoice(
        invoice_number=number or f"FT-{issue_date.isoformat()}-{amount}",
        client_name="Acme SpA",
        amount=amount,
        vat_rate=vat_rate,
        issue_date=issue_date,
        due_date=due_date or issue_date + timedelta(days=30),
        status=status,
        paid_date=paid_date,
    )


def make_expense(amount, expense_date, category_id=1, category_name="Software",
                 iva_included=True, iva_rate="0"):
    return Expense(
        description=f"spesa {amount}",
        amount=amount,
        category_id=category_id,
        category_name=category_name,
        expense_date=expense_date,
        iva_included=iva_included,
        iva_rate=iva_rate,
    )


# ── Fixtures ───────────────────────────────────────────────

@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def settings():
    return TaxSettings()


@pytest.fixture
def clients():
    return FakeClientRepository([
        Client(id=1, name="Beta Srl", hourly_rate="40"),
        Client(id=2, name="Acme SpA", hourly_rate="55.50"),
        Client(id=3, name="Gamma", hourly_rate="45"),
    ])


@pytest.fixture
def worked_hours_repo():
    return FakeWorkedHoursRepository()
