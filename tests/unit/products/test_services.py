"""Unit tests for ProductService (read-only catalog browse)."""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock

import pytest

from modules.products.dtos import ProductSearchDTO
from modules.products.exceptions import ProductNotFound
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


class TestGetProduct:
    def test_success(self, service, mock_repo):
        product = MagicMock()
        mock_repo.get_by_id.return_value = product
        assert service.get_product("some-id") is product

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.get_product(str(uuid.uuid4()))


class TestSearchProducts:
    def test_passes_terms_categories_and_limit(self, service, mock_repo, settings):
        settings.PRODUCT_SEARCH_LIMIT = 25
        mock_repo.search.return_value = []

        service.search_products(
            ProductSearchDTO(q="Classic  TEE", category="Hats", max_price_cents=2000)
        )

        mock_repo.search.assert_called_once_with(
            terms=["classic", "tee"],
            categories=["Hats"],
            max_price_cents=2000,
            limit=25,
        )


class TestBrowse:
    def test_list_products_delegates(self, service, mock_repo):
        mock_repo.list.return_value = ["a", "b"]
        assert service.list_products() == ["a", "b"]

    def test_list_categories_delegates(self, service, mock_repo):
        mock_repo.categories.return_value = ["Hats"]
        assert service.list_categories() == ["Hats"]

    def test_featured_uses_configured_names(self, service, mock_repo, settings):
        settings.FEATURED_PRODUCT_NAMES = ["Classic Tee", "Beanie"]
        service.list_featured()
        mock_repo.get_by_names.assert_called_once_with(["Classic Tee", "Beanie"])
