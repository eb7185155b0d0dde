"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into a domain error.
"""

from __future__ import annotations

from functools import reduce
from operator import or_
from typing import Any, Dict, List, Optional, Sequence

import structlog
from django.core.exceptions import ValidationError
from django.db.models import Q
from django.db.models.functions import Lower

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"category": "Hats"}
            {"name__icontains": "tee"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def search(
        self,
        terms: Sequence[str] = (),
        categories: Sequence[str] = (),
        max_price_cents: Optional[int] = None,
        limit: int = 100,
    ) -> List[Product]:
        """Search the catalog.

        Name terms (case-insensitive substrings) and categories
        (case-insensitive exact) are OR'ed together; the price ceiling is
        AND'ed on top.  With no criteria every product matches.
        """
        matchers = [Q(name__icontains=term) for term in terms if term]
        matchers += [Q(category__iexact=category) for category in categories if category]

        queryset = Product.objects.all()
        if matchers:
            queryset = queryset.filter(reduce(or_, matchers))
        if max_price_cents is not None:
            queryset = queryset.filter(price_cents__lte=max_price_cents)
        return list(queryset.order_by("name")[:limit])

    def categories(self) -> List[str]:
        return list(
            Product.objects.order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )

    def get_by_names(self, names: Sequence[str]) -> List[Product]:
        lowered = [name.strip().lower() for name in names if name.strip()]
        return list(
            Product.objects.annotate(lname=Lower("name"))
            .filter(lname__in=lowered)
            .order_by("name")
        )

    def get_for_update(self, id: str) -> Optional[Product]:
        """Lock and return the product row (``SELECT ... FOR UPDATE``).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def save_stock(self, product: Product) -> None:
        product.save(update_fields=["stock"])
        logger.info(
            "product.stock_saved",
            product_id=str(product.id),
            stock=product.stock,
        )
