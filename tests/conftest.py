import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.stores import CartStore, ProductStore


@pytest.fixture
def products_path(tmp_path):
    return tmp_path / "data" / "products.json"


@pytest.fixture
def carts_path(tmp_path):
    return tmp_path / "data" / "carts.json"


@pytest.fixture
def product_store(products_path):
    return ProductStore(products_path)


@pytest.fixture
def cart_store(carts_path):
    return CartStore(carts_path)


@pytest.fixture
def settings(products_path, carts_path):
    return Settings(PRODUCTS_PATH=products_path, CARTS_PATH=carts_path)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def sample_product():
    return {
        "title": "A",
        "description": "d",
        "code": "C1",
        "price": "10",
        "stock": "5",
        "category": "x",
    }
