"""
repositories/base.py
--------------------
Connection handling shared by every repository: borrow a pooled
connection, run one statement, commit or roll back.
psycopg2 errors leave this module as DataAccessFailure.
"""

import psycopg2
from psycopg2 import extras

from db.connection import pooled_connection
from errors import DataAccessFailure
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseRepository:
    """Thin helpers over the pool; subclasses own the SQL."""

    def _fetch_all(self, sql: str, params=()) -> list[dict]:
        with pooled_connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    rows = cur.fetchall()
                # Close the implicit read transaction before the connection goes back.
                conn.rollback()
                return rows
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Query failed in {type(self).__name__}: {e}")
                raise DataAccessFailure(str(e)) from e

    def _fetch_one(self, sql: str, params=()) -> dict | None:
        rows = self._fetch_all(sql, params)
        return rows[0] if rows else None

    def _execute(self, sql: str, params=(), returning: bool = False) -> tuple[int, dict | None]:
        """
        Run a write statement in its own transaction.

        Returns:
            (rowcount, first returned row or None).
        """
        with pooled_connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone() if returning else None
                    count = cur.rowcount
                conn.commit()
                return count, row
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Write failed in {type(self).__name__}: {e}")
                raise DataAccessFailure(str(e)) from e
