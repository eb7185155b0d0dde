"""Unit tests for ProductDjangoRepository (catalog queries and stock writes)."""

from __future__ import annotations

import uuid

import pytest

from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def catalog(make_product):
    return {
        "tee": make_product(name="Classic Tee", price_cents=1799, category="T-Shirts"),
        "hoodie": make_product(name="Zip Hoodie", price_cents=4299, category="Hoodies"),
        "cap": make_product(name="Classic Cap", price_cents=1999, category="Hats"),
        "beanie": make_product(name="Beanie", price_cents=1599, category="Hats"),
    }


class TestGetById:
    def test_found(self, repo, catalog):
        assert repo.get_by_id(str(catalog["tee"].id)) == catalog["tee"]

    def test_missing_returns_none(self, repo):
        assert repo.get_by_id(str(uuid.uuid4())) is None

    def test_malformed_returns_none(self, repo):
        assert repo.get_by_id("not-a-uuid") is None


class TestSearch:
    def test_terms_are_case_insensitive_and_ored(self, repo, catalog):
        results = repo.search(terms=["classic", "ZIP"])
        assert [p.name for p in results] == ["Classic Cap", "Classic Tee", "Zip Hoodie"]

    def test_categories_are_ored_with_terms(self, repo, catalog):
        results = repo.search(terms=["hoodie"], categories=["hats"])
        assert [p.name for p in results] == ["Beanie", "Classic Cap", "Zip Hoodie"]

    def test_price_ceiling_is_anded(self, repo, catalog):
        results = repo.search(terms=["classic"], max_price_cents=1800)
        assert [p.name for p in results] == ["Classic Tee"]

    def test_price_ceiling_alone(self, repo, catalog):
        results = repo.search(max_price_cents=1600)
        assert [p.name for p in results] == ["Beanie"]

    def test_limit(self, repo, catalog):
        assert len(repo.search(limit=2)) == 2


class TestCatalogQueries:
    def test_categories_are_distinct_and_sorted(self, repo, catalog):
        assert repo.categories() == ["Hats", "Hoodies", "T-Shirts"]

    def test_get_by_names_ignores_case_and_unknown_names(self, repo, catalog):
        results = repo.get_by_names(["classic tee", "BEANIE", "Missing"])
        assert [p.name for p in results] == ["Beanie", "Classic Tee"]


class TestStockWrites:
    def test_get_for_update_returns_row(self, repo, catalog):
        locked = repo.get_for_update(str(catalog["cap"].id))
        assert locked == catalog["cap"]

    def test_get_for_update_malformed_returns_none(self, repo):
        assert repo.get_for_update("bogus") is None

    def test_save_stock_persists_only_stock(self, repo, catalog):
        product = catalog["tee"]
        product.stock = 3
        product.price_cents = 1  # not written
        repo.save_stock(product)

        product.refresh_from_db()
        assert product.stock == 3
        assert product.price_cents == 1799
