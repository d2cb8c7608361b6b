"""
Pytest configuration and fixtures
"""

import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Project modules live at the repository root
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_service import CatalogRequestError, get_catalog_service
from config import Settings, get_settings
from schemas import Category, Product, ProductUpdate, ProductWrite
from state import CatalogStore, get_store

TITLES = [
    "Classic Red Shirt", "Wireless Mouse", "Oak Dining Table", "Blue Denim Jacket",
    "Mechanical Keyboard", "Leather Sofa", "Running Shoes", "USB-C Charger",
    "Bookshelf", "Wool Sweater", "Gaming Headset", "Desk Lamp",
]
PRICES = [25, 19.99, 450, 80, 120, 999, 65, 15, 150, 55, 89.5, 35]


def make_product(pid: int, title: str, price: float, category: Optional[Category] = None,
                 description: Optional[str] = None, images: Optional[List[str]] = None) -> Product:
    return Product(
        id=pid,
        title=title,
        price=price,
        category=category,
        description=description,
        images=images if images is not None else [],
    )


class FakeCatalogService:
    """In-memory stand-in for CatalogService that records every call."""

    def __init__(self, products, categories):
        self.products: List[Product] = list(products)
        self.categories: List[Category] = list(categories)
        self.fail = set()
        self.calls: List[str] = []
        self.created: List[ProductWrite] = []
        self.updated = []

    def _call(self, name: str, message: str):
        self.calls.append(name)
        if name in self.fail:
            raise CatalogRequestError(message)

    def _category(self, category_id: int) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def list_products(self) -> List[Product]:
        self._call("list_products", "Failed to fetch products")
        return list(self.products)

    def list_categories(self) -> List[Category]:
        self._call("list_categories", "Failed to fetch categories")
        return list(self.categories)

    def create_product(self, data: ProductWrite) -> Product:
        self._call("create_product", "Failed to create product")
        self.created.append(data)
        product = make_product(
            max((p.id for p in self.products), default=0) + 1,
            data.title, data.price, self._category(data.category_id), data.description, data.images,
        )
        self.products.append(product)
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        self._call("update_product", "Failed to update product")
        self.updated.append((product_id, data))
        product = make_product(
            product_id, data.title, data.price, self._category(data.category_id), data.description, data.images,
        )
        self.products = [product if p.id == product_id else p for p in self.products]
        return product


@pytest.fixture
def categories() -> List[Category]:
    return [Category(id=1, name="Clothes"), Category(id=2, name="Electronics"), Category(id=3, name="Furniture")]


@pytest.fixture
def products(categories) -> List[Product]:
    """Twelve products, ids 1..12, distinct titles and prices; #1 has no images."""
    return [
        make_product(
            i + 1, title, price, categories[i % 3],
            description=f"Description of {title.lower()}",
            images=[] if i == 0 else [f"https://img.example.com/{i + 1}.jpg", f"https://img.example.com/{i + 1}b.jpg"],
        )
        for i, (title, price) in enumerate(zip(TITLES, PRICES))
    ]


@pytest.fixture
def store(products, categories) -> CatalogStore:
    s = CatalogStore((5, 10, 25, 50), 10)
    s.apply_products(products, s.begin_load())
    s.set_categories(categories)
    return s


@pytest.fixture
def fake_service(products, categories) -> FakeCatalogService:
    return FakeCatalogService(products, categories)


@pytest.fixture
def settings() -> Settings:
    return Settings(load_on_startup=False)


@pytest.fixture
def client(store, fake_service, settings):
    """TestClient wired to the fixture store and fake service (no startup load)."""
    from fastapi.testclient import TestClient
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_catalog_service] = lambda: fake_service
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
