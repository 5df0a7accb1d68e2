"""
repositories/invoice_repo.py
----------------------------
Data access layer for invoices.
All SQL queries related to the `invoices` table live here.
"""

from datetime import date
from typing import Iterable, Optional

from models.invoice import Invoice, InvoiceStatus
from repositories.base import BaseRepository
from utils.dates import DateRange
from utils.logger import get_logger

logger = get_logger(__name__)


class InvoiceRepository(BaseRepository):
    """Queries and status updates on the invoices table."""

    # ── READ ──────────────────────────────────────────────

    def query(
        self,
        statuses: Optional[Iterable[InvoiceStatus]] = None,
        issue_range: Optional[DateRange] = None,
        paid_range: Optional[DateRange] = None,
    ) -> list[Invoice]:
        """
        Fetch invoices matching every filter given.

        Args:
            statuses: Keep only these statuses.
            issue_range: Keep invoices whose issue_date falls in the range.
            paid_range: Keep invoices whose paid_date falls in the range.

        Returns:
            Invoices ordered by issue_date descending.
        """
        sql = "SELECT * FROM invoices WHERE TRUE"
        params: list = []
        if statuses is not None:
            sql += " AND status = ANY(%s)"
            params.append([InvoiceStatus(s).value for s in statuses])
        if issue_range is not None:
            sql += " AND issue_date BETWEEN %s AND %s"
            params.extend([issue_range.start, issue_range.end])
        if paid_range is not None:
            sql += " AND paid_date BETWEEN %s AND %s"
            params.extend([paid_range.start, paid_range.end])
        sql += " ORDER BY issue_date DESC, id DESC;"
        return [self._row_to_invoice(r) for r in self._fetch_all(sql, params)]

    # ── UPDATE ────────────────────────────────────────────

    def set_status(
        self, invoice_id: int, status: InvoiceStatus, paid_date: Optional[date] = None
    ) -> bool:
        """
        Change an invoice's status. Moving to PAID stamps paid_date
        (today unless given); other transitions leave paid_date alone.

        Returns:
            True if a row was updated.
        """
        status = InvoiceStatus(status)
        if status is InvoiceStatus.PAID and paid_date is None:
            paid_date = date.today()
        sql = """
            UPDATE invoices
            SET status = %s,
                paid_date = CASE WHEN %s THEN %s ELSE paid_date END,
                updated_at = NOW()
            WHERE id = %s;
        """
        count, _ = self._execute(
            sql, (status.value, status is InvoiceStatus.PAID, paid_date, invoice_id)
        )
        if count:
            logger.info(f"Invoice #{invoice_id} -> {status.value}")
        return count > 0

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_invoice(row: dict) -> Invoice:
        """Convert a database row to an Invoice domain object."""
        return Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            client_name=row["client_name"],
            description=row["description"],
            amount=row["amount"],
            vat_rate=row["vat_rate"],
            vat_amount=row["vat_amount"],
            total_amount=row["total_amount"],
            status=row["status"],
            issue_date=row["issue_date"],
            due_date=row["due_date"],
            paid_date=row["paid_date"],
            created_at=row["created_at"],
        )
