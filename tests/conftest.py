"""Shared fixtures for the product repository tests."""

from datetime import date
from decimal import Decimal

import pytest

from models.product import Product
from repositories.product_repo import ProductRepository
from tests.fakes import FakeConnectionProvider


@pytest.fixture
def provider() -> FakeConnectionProvider:
    return FakeConnectionProvider()


@pytest.fixture
def repo(provider) -> ProductRepository:
    return ProductRepository(provider)


@pytest.fixture
def milk() -> Product:
    return Product(
        name="Milk",
        producer="Acme",
        price=Decimal("2.50"),
        expiration_date=date(2024, 1, 1),
    )
