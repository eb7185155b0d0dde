"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
catalog browse layer and the row-lock primitive used by the Stock Ledger.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def search(
        self,
        terms: Sequence[str] = (),
        categories: Sequence[str] = (),
        max_price_cents: Optional[int] = None,
        limit: int = 100,
    ) -> List[Product]:
        """Name terms OR categories, AND a price ceiling, ordered by name."""

    @abstractmethod
    def categories(self) -> List[str]:
        """Distinct category names, sorted."""

    @abstractmethod
    def get_by_names(self, names: Sequence[str]) -> List[Product]:
        """Products whose name matches one of *names* (case-insensitive)."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction; the lock is held until it ends.
        Returns ``None`` if the product does not exist.
        """

    @abstractmethod
    def save_stock(self, product: Product) -> None:
        """Persist ``product.stock`` of a row locked by ``get_for_update``."""
