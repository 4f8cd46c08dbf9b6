"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

Repositories never talk to the pool directly: they receive a connection
provider, i.e. any object exposing ``get_connection()`` and
``release_connection(conn)``. Two providers live here: one backed by the
module pool and one that opens a fresh connection per call.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX,
              dsn: str = DATABASE_URL) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string or URL.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is None:
        logger.warning(f"Pool is not initialized; dropping connection (id={id(conn)}) without returning it.")
        return
    _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


class PoolConnectionProvider:
    """Connection provider backed by the module-level pool."""

    def get_connection(self):
        return get_connection()

    def release_connection(self, conn) -> None:
        release_connection(conn)


class DirectConnectionProvider:
    """
    Connection provider that opens a new connection on every call
    and closes it on release. Useful for scripts and integration tests
    where a pool is overkill.
    """

    def __init__(self, dsn: str = DATABASE_URL):
        self.dsn = dsn

    def get_connection(self):
        conn = psycopg2.connect(self.dsn)
        logger.debug(f"Opened direct connection (id={id(conn)})")
        return conn

    def release_connection(self, conn) -> None:
        if not conn.closed:
            conn.close()
        logger.debug(f"Closed direct connection (id={id(conn)})")
