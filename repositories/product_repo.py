"""
repositories/product_repo.py
-----------------------------
Data access layer for products.
All SQL queries related to the `products` table live here.
"""

from datetime import datetime
from decimal import Decimal

import psycopg2

from db.connection import PoolConnectionProvider
from models.product import Product
from repositories.exceptions import NotFoundError, PreconditionError, StorageOperationError
from utils.logger import get_logger

logger = get_logger(__name__)

# Column order is the contract `_row_to_product` reads positionally.
_COLUMNS = "id, name, producer, price, expiration_date, creation_time"

INSERT_PRODUCT = """
    INSERT INTO products (name, producer, price, expiration_date)
    VALUES (%s, %s, %s, %s)
    RETURNING id, creation_time;
"""
UPDATE_PRODUCT = """
    UPDATE products
    SET name = %s, producer = %s, price = %s, expiration_date = %s
    WHERE id = %s;
"""
SELECT_PRODUCTS = f"SELECT {_COLUMNS} FROM products;"
SELECT_PRODUCT = f"SELECT {_COLUMNS} FROM products WHERE id = %s;"
DELETE_PRODUCT = "DELETE FROM products WHERE id = %s;"


class ProductRepository:
    """
    Repository for CRUD operations on the products table.

    Every public method borrows one connection from the provider and
    gives it back before returning, whether the call succeeded or not.
    """

    def __init__(self, provider=None):
        """
        Args:
            provider: Object with ``get_connection()`` and
                ``release_connection(conn)``; defaults to the module pool.
        """
        self._provider = provider or PoolConnectionProvider()

    # ── CREATE ────────────────────────────────────────────

    def save(self, product: Product) -> Product:
        """
        Insert a new product.

        Args:
            product: An unsaved Product (``id`` must be None).

        Returns:
            The same Product with its `id` and `creation_time` populated.

        Raises:
            PreconditionError: If the product already has an id.
            StorageOperationError: If nothing was inserted or the database call failed.
        """
        if product.id is not None:
            raise PreconditionError(f"Product #{product.id} is already saved; use update() instead")

        params = self._write_params(product)
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(INSERT_PRODUCT, params)
                row = cur.fetchone()
            if row is None:
                raise StorageOperationError(f"Data was not saved: {product}")
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            logger.error(f"Failed to save product {product}: {e}")
            raise StorageOperationError(f"Error saving product {product}: {e}") from e
        except StorageOperationError:
            self._rollback(conn)
            logger.error(f"Insert returned no row for product {product}")
            raise
        finally:
            self._provider.release_connection(conn)

        product.id = row[0]
        product.creation_time = row[1]
        logger.info(f"Saved product #{product.id} ({product.name})")
        return product

    # ── READ ──────────────────────────────────────────────

    def find_all(self) -> list[Product]:
        """
        Fetch every product, in whatever order the database returns them.

        Returns:
            List of Product objects (empty when the table is empty).
        """
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(SELECT_PRODUCTS)
                return [self._row_to_product(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch products: {e}")
            raise StorageOperationError(f"Error fetching products: {e}") from e
        finally:
            self._provider.release_connection(conn)

    def find_one(self, product_id: int) -> Product:
        """
        Fetch a single product by ID.

        Raises:
            NotFoundError: If no row has this id.
        """
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(SELECT_PRODUCT, (product_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch product #{product_id}: {e}")
            raise StorageOperationError(f"Error fetching product #{product_id}: {e}") from e
        finally:
            self._provider.release_connection(conn)

        if row is None:
            raise NotFoundError(f"Product with id = {product_id} does not exist", product_id)
        return self._row_to_product(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, product: Product) -> None:
        """
        Overwrite name, producer, price and expiration date of a stored product.

        Raises:
            PreconditionError: If the product has no id (no connection is taken).
            NotFoundError: If no row has the product's id.
        """
        if product.id is None:
            raise PreconditionError("Cannot update a product without ID")

        params = self._write_params(product) + (product.id,)
        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(UPDATE_PRODUCT, params)
                updated = cur.rowcount
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            logger.error(f"Failed to update product #{product.id}: {e}")
            raise StorageOperationError(f"Error updating product #{product.id}: {e}") from e
        finally:
            self._provider.release_connection(conn)

        if updated == 0:
            raise NotFoundError(f"Product with id = {product.id} does not exist", product.id)
        logger.info(f"Updated product #{product.id}")

    # ── DELETE ────────────────────────────────────────────

    def remove(self, product: Product) -> None:
        """
        Delete a stored product.

        Raises:
            PreconditionError: If the product has no id (no connection is taken).
            NotFoundError: If no row has the product's id.
        """
        if product.id is None:
            raise PreconditionError("Cannot remove a product without ID")

        conn = self._acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(DELETE_PRODUCT, (product.id,))
                deleted = cur.rowcount
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            logger.error(f"Failed to delete product #{product.id}: {e}")
            raise StorageOperationError(f"Error deleting product #{product.id}: {e}") from e
        finally:
            self._provider.release_connection(conn)

        if deleted == 0:
            raise NotFoundError(f"Product with id = {product.id} does not exist", product.id)
        logger.info(f"Deleted product #{product.id}")

    # ── HELPERS ───────────────────────────────────────────

    def _acquire(self):
        """Borrow a connection, translating driver failures."""
        try:
            return self._provider.get_connection()
        except psycopg2.Error as e:
            logger.error(f"Could not obtain a database connection: {e}")
            raise StorageOperationError(f"Could not obtain a database connection: {e}") from e

    @staticmethod
    def _rollback(conn) -> None:
        """Roll back after a failed write; the original error is the one re-raised."""
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed (conn id={id(conn)}): {e}")

    @staticmethod
    def _write_params(product: Product) -> tuple:
        """Bind values for INSERT/UPDATE; rejects a non-Decimal price before any I/O."""
        if not isinstance(product.price, Decimal):
            raise PreconditionError(
                f"Product price must be a Decimal, got {type(product.price).__name__}: {product.price!r}"
            )
        return (product.name, product.producer, product.price, product.expiration_date)

    @staticmethod
    def _row_to_product(row: tuple) -> Product:
        """Convert a database row tuple to a Product domain object."""
        if any(value is None for value in row[:6]):
            raise StorageOperationError(f"Products row contains NULL columns: {row!r}")
        expiration_date = row[4]
        if isinstance(expiration_date, datetime):
            expiration_date = expiration_date.date()
        return Product(
            id=row[0],
            name=row[1],
            producer=row[2],
            price=row[3],
            expiration_date=expiration_date,
            creation_time=row[5],
        )
