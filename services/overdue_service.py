"""
services/overdue_service.py
---------------------------
Promotes stale unpaid invoices to OVERDUE.
"""

from datetime import date
from typing import Optional

from models.invoice import InvoiceStatus, UNPAID_STATUSES
from repositories.invoice_repo import InvoiceRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class OverdueInvoiceTransitioner:
    """
    Sweep draft/sent invoices whose due date has passed.

    Runs inline before the all-time summary; there is no scheduler.
    Paid and already-overdue invoices are never touched, so a second
    sweep on the same day changes nothing.
    """

    def __init__(self, invoice_repo=None):
        self.invoice_repo = invoice_repo or InvoiceRepository()

    def sweep(self, today: Optional[date] = None) -> int:
        """
        Mark every unpaid invoice past its due date as overdue.

        Args:
            today: Reference day (default: date.today()).

        Returns:
            Number of invoices transitioned.
        """
        today = today or date.today()
        candidates = self.invoice_repo.query(statuses=UNPAID_STATUSES)
        transitioned = 0
        for invoice in candidates:
            if not invoice.is_overdue_on(today):
                continue
            if self.invoice_repo.set_status(invoice.id, InvoiceStatus.OVERDUE):
                transitioned += 1

        if transitioned:
            logger.info(f"Marked {transitioned} invoice(s) overdue as of {today}")
        return transitioned
