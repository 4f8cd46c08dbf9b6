"""
main.py
-------
Entry point for the product data access layer.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Report what is currently stored in the products table.
    - Release the pool on exit.
"""

from db.connection import init_pool, close_pool
from db.init_db import create_tables
from repositories.exceptions import RepositoryError
from repositories.product_repo import ProductRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    """Bootstrap the database and log the stored products."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    try:
        create_tables()

        # ── 2. Summary ───────────────────────────────────
        repo = ProductRepository()
        try:
            products = repo.find_all()
        except RepositoryError as e:
            logger.error(f"Could not list products: {e}")
            raise
        logger.info(f"{len(products)} product(s) stored.")
        for product in products:
            logger.info(str(product))
    finally:
        # ── 3. Cleanup ───────────────────────────────────
        close_pool()


if __name__ == "__main__":
    main()
