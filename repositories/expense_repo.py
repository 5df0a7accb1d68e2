"""
repositories/expense_repo.py
-----------------------------
Data access layer for business expenses.
All SQL queries related to the `expenses` table live here.
"""

from typing import Optional

from models.expense import Expense
from repositories.base import BaseRepository
from utils.dates import DateRange


class ExpenseRepository(BaseRepository):
    """Read access to expenses joined with their category."""

    def query(self, date_range: Optional[DateRange] = None) -> list[Expense]:
        """
        Fetch expenses, optionally limited to an expense_date range.

        Args:
            date_range: Start and end dates (inclusive); None for all time.

        Returns:
            List of Expense objects ordered by date descending.
        """
        sql = """
            SELECT e.*, c.name AS category_name
            FROM expenses e
            JOIN categories c ON c.id = e.category_id
        """
        params: list = []
        if date_range is not None:
            sql += " WHERE e.expense_date BETWEEN %s AND %s"
            params.extend([date_range.start, date_range.end])
        sql += " ORDER BY e.expense_date DESC, e.id DESC;"
        return [self._row_to_expense(r) for r in self._fetch_all(sql, params)]

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_expense(row: dict) -> Expense:
        """Convert a database row to an Expense domain object."""
        return Expense(
            id=row["id"],
            description=row["description"],
            amount=row["amount"],
            iva_included=row["iva_included"],
            iva_rate=row["iva_rate"],
            iva_amount=row["iva_amount"],
            category_id=row["category_id"],
            category_name=row.get("category_name"),
            expense_date=row["expense_date"],
            notes=row["notes"],
            created_at=row["created_at"],
        )
