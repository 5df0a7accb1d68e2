"""
db/connection.py
----------------
PostgreSQL connection pool for the ledger database.
Repositories borrow one connection per statement through ``pooled_connection()``.
"""

from contextlib import contextmanager

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from errors import DataAccessFailure
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL) -> None:
    """
    Open the pool. Calling it again while open does nothing.

    Raises:
        DataAccessFailure: the database cannot be reached.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
    except psycopg2.OperationalError as e:
        logger.error(f"Cannot open ledger database pool: {e}")
        raise DataAccessFailure("Ledger database unreachable") from e
    logger.info(f"Ledger database pool ready ({min_conn}-{max_conn} connections).")


@contextmanager
def pooled_connection():
    """
    Borrow a connection for the duration of a ``with`` block; it goes
    back to the pool even when the block raises.

    Raises:
        DataAccessFailure: the pool is closed or exhausted.
    """
    if _pool is None:
        raise DataAccessFailure("Ledger database pool is not open. Call init_pool() first.")
    try:
        conn = _pool.getconn()
    except pool.PoolError as e:
        raise DataAccessFailure(f"No ledger database connection available: {e}") from e
    try:
        yield conn
    finally:
        _pool.putconn(conn)


def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Ledger database pool closed.")
