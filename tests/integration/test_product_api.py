"""Integration tests for the read-only catalog endpoints.

Covers:
- GET /api/v1/products/ with and without search parameters.
- GET /api/v1/products/{id}/ (200, 404).
- GET /api/v1/products/categories/ and /featured/.
"""

from __future__ import annotations

import uuid

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


@pytest.fixture()
def catalog(make_product):
    return {
        "tee": make_product(name="Classic Tee", price_cents=1999, category="T-Shirts"),
        "vneck": make_product(name="V-Neck Tee", price_cents=2499, category="T-Shirts"),
        "cap": make_product(name="Classic Cap", price_cents=1499, category="Hats"),
        "jacket": make_product(name="Denim Jacket", price_cents=7999, category="Jackets"),
    }


class TestListProducts:
    def test_lists_all_ordered_by_name(self, api_client, catalog):
        response = api_client.get(URL)
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 4
        assert [p["name"] for p in data["results"]] == [
            "Classic Cap",
            "Classic Tee",
            "Denim Jacket",
            "V-Neck Tee",
        ]

    def test_search_terms_are_ored(self, api_client, catalog):
        data = api_client.get(URL, {"q": "tee jacket"}).json()
        assert {p["name"] for p in data["results"]} == {
            "Classic Tee",
            "V-Neck Tee",
            "Denim Jacket",
        }

    def test_category_is_case_insensitive(self, api_client, catalog):
        data = api_client.get(URL, {"category": "hats"}).json()
        assert [p["name"] for p in data["results"]] == ["Classic Cap"]

    def test_price_ceiling_is_anded(self, api_client, catalog):
        data = api_client.get(URL, {"q": "tee", "max_price_cents": 2000}).json()
        assert [p["name"] for p in data["results"]] == ["Classic Tee"]

    def test_invalid_price_ceiling_returns_400(self, api_client, catalog):
        response = api_client.get(URL, {"max_price_cents": 0})
        assert response.status_code == 400

    def test_results_expose_stock_and_price(self, api_client, catalog):
        result = api_client.get(f"{URL}{catalog['cap'].id}/").json()
        assert result["price_cents"] == 1499
        assert result["stock"] == 10
        assert result["category"] == "Hats"


class TestRetrieveProduct:
    def test_unknown_returns_404(self, api_client):
        response = api_client.get(f"{URL}{uuid.uuid4()}/")
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_malformed_id_returns_404(self, api_client):
        response = api_client.get(f"{URL}not-a-uuid/")
        assert response.status_code == 404


class TestCatalogExtras:
    def test_categories_are_distinct_and_sorted(self, api_client, catalog):
        data = api_client.get(f"{URL}categories/").json()
        assert data == {"categories": ["Hats", "Jackets", "T-Shirts"]}

    def test_featured_uses_configured_names(self, api_client, catalog, settings):
        settings.FEATURED_PRODUCT_NAMES = ["classic tee", "Denim Jacket", "Missing"]
        data = api_client.get(f"{URL}featured/").json()
        assert [p["name"] for p in data["results"]] == ["Classic Tee", "Denim Jacket"]

    def test_catalog_is_read_only(self, api_client):
        response = api_client.post(URL, {"name": "New"}, format="json")
        assert response.status_code == 405
