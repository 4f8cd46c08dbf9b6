"""
repositories/exceptions.py
--------------------------
Errors raised by the data access layer.

Driver exceptions never leave a repository as-is: they are re-raised as
StorageOperationError with the original exception chained as its cause.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base class for all data access errors."""


class PreconditionError(RepositoryError):
    """The entity is in the wrong state for the operation (checked before any I/O)."""


class NotFoundError(RepositoryError):
    """No row matches the requested id."""

    def __init__(self, message: str, product_id: Optional[int] = None):
        super().__init__(message)
        self.product_id = product_id


class StorageOperationError(RepositoryError):
    """The database call failed or did not write what was expected."""
