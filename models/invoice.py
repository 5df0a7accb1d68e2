"""
models/invoice.py
-----------------
Domain model for issued invoices.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from utils.money import ZERO, percent_of, round2, to_decimal


class InvoiceStatus(str, Enum):
    """draft -> sent -> paid, or draft/sent -> overdue once due_date has passed."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


UNPAID_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT)


@dataclass
class Invoice:
    """
    A billable engagement.

    Attributes:
        amount: Net amount, the figure the regime taxes.
        vat_rate: IVA percentage charged on the invoice (often 0 in the regime).
        vat_amount: ``amount × vat_rate / 100`` rounded to cents.
        total_amount: ``amount + vat_amount``; what the client actually pays.
        paid_date: Set exactly when status becomes PAID.
    """
    invoice_number: str
    client_name: str
    amount: Decimal
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    vat_rate: Decimal = ZERO
    vat_amount: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    paid_date: Optional[date] = None
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.status = InvoiceStatus(self.status)
        self.amount = to_decimal(self.amount, "amount")
        self.vat_rate = to_decimal(self.vat_rate, "vat_rate")
        if self.vat_amount is None:
            self.vat_amount = percent_of(self.amount, self.vat_rate)
        else:
            self.vat_amount = to_decimal(self.vat_amount, "vat_amount")
        if self.total_amount is None:
            self.total_amount = round2(self.amount + self.vat_amount)
        else:
            self.total_amount = to_decimal(self.total_amount, "total_amount")

    def is_paid(self) -> bool:
        return self.status is InvoiceStatus.PAID

    def is_overdue_on(self, today: date) -> bool:
        """True when an unpaid draft/sent invoice is past its due date."""
        return (
            self.status in UNPAID_STATUSES
            and self.paid_date is None
            and self.due_date < today
        )

    def __str__(self) -> str:
        return f"{self.invoice_number} | {self.client_name} | {self.total_amount:.2f} | {self.status.value}"
