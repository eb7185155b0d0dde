"""Product browse service (read-only).

Lists and searches the catalog for the storefront.  Nothing here writes
to ``Product``: stock changes belong to ``StockLedger``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.conf import settings

from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import ProductSearchDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for catalog queries.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    def list_products(self) -> List[Product]:
        """Return the full catalog ordered by name."""
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def search_products(self, dto: ProductSearchDTO) -> List[Product]:
        terms = dto.search_terms()
        categories = dto.search_categories()
        results = self._repo.search(
            terms=terms,
            categories=categories,
            max_price_cents=dto.max_price_cents,
            limit=settings.PRODUCT_SEARCH_LIMIT,
        )
        logger.info(
            "product.search",
            terms=terms,
            categories=categories,
            max_price_cents=dto.max_price_cents,
            result_count=len(results),
        )
        return results

    def list_categories(self) -> List[str]:
        return self._repo.categories()

    def list_featured(self) -> List[Product]:
        """Products named in ``FEATURED_PRODUCT_NAMES``."""
        return self._repo.get_by_names(settings.FEATURED_PRODUCT_NAMES)
