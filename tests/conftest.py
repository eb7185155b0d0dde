import pytest

from django.core.cache import cache
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def customer():
    return Customer.objects.create(name="Alice Example", email="alice@example.com")


@pytest.fixture()
def other_customer():
    return Customer.objects.create(name="Bob Example", email="bob@example.com")


@pytest.fixture()
def make_product():
    """Factory for catalog products with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Product:
        counter["n"] += 1
        defaults = {
            "name": f"Product {counter['n']}",
            "description": "Test product",
            "price_cents": 1000,
            "stock": 10,
            "category": "Accessories",
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
