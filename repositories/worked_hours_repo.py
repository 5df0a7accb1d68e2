"""
repositories/worked_hours_repo.py
---------------------------------
Data access layer for logged hours.
All SQL queries related to the `worked_hours` table live here.
"""

from typing import Optional

from models.worked_hours import WorkedHourEntry
from repositories.base import BaseRepository
from utils.dates import DateRange
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT = """
    SELECT wh.id, wh.client_id, c.name AS client_name, wh.worked_date,
           wh.hours, wh.amount_cached, wh.note, wh.created_at
    FROM worked_hours wh
    JOIN clients c ON c.id = wh.client_id
"""


class WorkedHoursRepository(BaseRepository):
    """Repository for CRUD operations on the worked_hours table."""

    # ── CREATE ────────────────────────────────────────────

    def insert(self, entry: WorkedHourEntry) -> WorkedHourEntry:
        """
        Insert a new entry.

        Returns:
            The same entry with its `id` and `created_at` populated.
        """
        sql = """
            INSERT INTO worked_hours (client_id, worked_date, hours, amount_cached, note)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        _, row = self._execute(
            sql,
            (entry.client_id, entry.worked_date, entry.hours, entry.amount_cached, entry.note),
            returning=True,
        )
        entry.id = row["id"]
        entry.created_at = row["created_at"]
        logger.info(f"Inserted worked hours #{entry.id} for client {entry.client_id}")
        return entry

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, entry_id: int) -> Optional[WorkedHourEntry]:
        row = self._fetch_one(_SELECT + " WHERE wh.id = %s;", (entry_id,))
        return self._row_to_entry(row) if row else None

    def query(
        self,
        date_range: Optional[DateRange] = None,
        client_id: Optional[int] = None,
        newest_first: bool = False,
    ) -> list[WorkedHourEntry]:
        """
        Fetch entries by worked_date range and/or client.

        Ordered by worked_date then creation order, reversed when
        ``newest_first`` is set.
        """
        conditions: list[str] = []
        params: list = []
        if date_range is not None:
            conditions.append("wh.worked_date BETWEEN %s AND %s")
            params.extend([date_range.start, date_range.end])
        if client_id is not None:
            conditions.append("wh.client_id = %s")
            params.append(client_id)

        sql = _SELECT
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        direction = "DESC" if newest_first else "ASC"
        sql += f" ORDER BY wh.worked_date {direction}, wh.created_at {direction}, wh.id {direction};"
        return [self._row_to_entry(r) for r in self._fetch_all(sql, params)]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entry: WorkedHourEntry) -> bool:
        """
        Persist every mutable field of an existing entry (must have id set).

        Returns:
            True if a row was updated, False otherwise.
        """
        sql = """
            UPDATE worked_hours
            SET client_id = %s, worked_date = %s, hours = %s,
                amount_cached = %s, note = %s, updated_at = NOW()
            WHERE id = %s;
        """
        count, _ = self._execute(
            sql,
            (entry.client_id, entry.worked_date, entry.hours,
             entry.amount_cached, entry.note, entry.id),
        )
        return count > 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entry_id: int) -> bool:
        """
        Hard-delete an entry.

        Returns:
            True if a row was deleted, False otherwise.
        """
        count, _ = self._execute("DELETE FROM worked_hours WHERE id = %s;", (entry_id,))
        if count:
            logger.info(f"Deleted worked hours #{entry_id}")
        return count > 0

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_entry(row: dict) -> WorkedHourEntry:
        """Convert a database row to a WorkedHourEntry domain object."""
        return WorkedHourEntry(
            id=row["id"],
            client_id=row["client_id"],
            client_name=row.get("client_name"),
            worked_date=row["worked_date"],
            hours=row["hours"],
            amount_cached=row["amount_cached"],
            note=row["note"],
            created_at=row["created_at"],
        )
