"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import PoolConnectionProvider
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Products table: one row per product; creation_time is filled in by the database
CREATE TABLE IF NOT EXISTS products (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    producer        VARCHAR(255) NOT NULL,
    price           NUMERIC(19,4) NOT NULL,
    expiration_date DATE NOT NULL,
    creation_time   TIMESTAMP NOT NULL DEFAULT NOW()
);
"""


def create_tables(provider=None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        provider: Connection provider to use; defaults to the module pool.
    """
    provider = provider or PoolConnectionProvider()
    conn = provider.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        provider.release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    create_tables()
    close_pool()
    print("Database schema created successfully.")
