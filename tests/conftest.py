from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pytest

from fastquery.query import SupportedParams, SupportedParamsRegistry
from fastquery.repository import InMemoryRepository


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    # Automatically clear settings-related environment variables before each test
    for name in (
        "APP_ENV",
        "APP_NAME",
        "DEBUG",
        "DATABASE_URL",
        "LOG_LEVEL",
        "LOG_JSON_FORMAT",
        "DEFAULT_SORT_FIELD",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@dataclass
class Owner:
    name: str
    country: Optional[str] = None


@dataclass
class Product:
    id: int
    name: str
    category: str
    price: Decimal
    created_at: datetime
    description: Optional[str] = None
    active: bool = True
    owner: Optional[Owner] = None
    tags: List[str] = field(default_factory=list)


PRODUCTS = [
    Product(1, "Desk Lamp", "lighting", Decimal("24.50"), datetime(2024, 1, 5),
            "Warm white LED lamp", True, Owner("Ada", "UK"), ["led", "desk"]),
    Product(2, "Floor Lamp", "lighting", Decimal("89.00"), datetime(2024, 2, 1),
            "Tall lamp with linen shade", True, Owner("Grace", "US"), ["floor"]),
    Product(3, "Office Chair", "furniture", Decimal("149.99"), datetime(2024, 3, 12),
            "Ergonomic chair", False, Owner("Ada", "UK"), []),
    Product(4, "Standing Desk", "furniture", Decimal("399.00"), datetime(2024, 4, 20),
            None, True, None, ["desk"]),
    Product(5, "Bookshelf", "furniture", Decimal("75.00"), datetime(2024, 5, 2),
            "Five shelves, oak finish", True, Owner("Linus", None), []),
]


@pytest.fixture
def products():
    return list(PRODUCTS)


@pytest.fixture
def repository(products):
    return InMemoryRepository(products)


@pytest.fixture
def registry():
    """Allow-lists used across the suite; ``Product`` mirrors a typical catalog."""
    registry = SupportedParamsRegistry()
    registry.register(
        Product,
        SupportedParams(
            allowed_sort_fields=("name", "created_at"),
            allowed_filter_fields=("category",),
            allowed_search_fields=("name",),
            max_page_size=50,
        ),
    )
    registry.register("Empty", SupportedParams())
    return registry


@pytest.fixture
def product_cls():
    return Product


@pytest.fixture
def owner_cls():
    return Owner
