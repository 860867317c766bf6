import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from shopcart.models import Category, Product
from shopcart.utils.storage_utils import InMemoryStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def serum():
    return Product(id="p1", name="Rose Serum", price=50, stock=10, category="Skincare")


@pytest.fixture
def perfume():
    return Product(
        id="p2",
        name="Sandal Perfume",
        price=40,
        stock=1,
        category="Fragrance",
        variants={
            "v50": {"name": "50ml", "price": 40, "stock": 3},
            "v100": {"name": "100ml", "price": 70, "oldPrice": 80, "stock": 0},
            "v200": {"name": "200ml", "price": 120, "stock": 5},
        },
    )


@pytest.fixture
def categories():
    return [
        Category(id="c1", name="Skincare"),
        Category(id="c2", name="Fragrance"),
        Category(id="c3", name="Haircare"),
    ]
