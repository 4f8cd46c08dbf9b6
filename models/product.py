"""
models/product.py
-----------------
Domain model for products stored in the `products` table.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional


@dataclass
class Product:
    """
    Represents a single product.

    Attributes:
        name: Product name.
        producer: Manufacturer or brand.
        price: Exact price; floats are rejected.
        expiration_date: Calendar date the product expires on.
        id: Database primary key (None for new records).
        creation_time: Timestamp assigned by the database on insert.
    """
    name: str
    producer: str
    price: Decimal
    expiration_date: date
    id: Optional[int] = None
    creation_time: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.price, float):
            raise TypeError("Product price must be a Decimal, not float")
        if not isinstance(self.price, Decimal):
            try:
                self.price = Decimal(self.price)
            except (InvalidOperation, TypeError, ValueError) as e:
                raise ValueError(f"Invalid product price: {self.price!r}") from e

    def is_saved(self) -> bool:
        """Returns True once the database has assigned an id."""
        return self.id is not None

    def __str__(self) -> str:
        ref = f"#{self.id}" if self.is_saved() else "(unsaved)"
        return f"{ref} {self.name} by {self.producer} | {self.price} | expires {self.expiration_date}"
