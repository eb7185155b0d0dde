"""Product model with stock control.

Business rules implemented:
- Stock can never be negative (``PositiveIntegerField`` + DB check constraint).
- Prices are integer minor currency units (cents), never negative.
- Product names are unique case-insensitively (the catalog seed is idempotent
  by name).
- ``stock`` is written only by ``modules.products.ledger.StockLedger``; the
  browse/search layer reads it but never mutates it.
"""

from __future__ import annotations

import structlog
from django.db import models
from django.db.models.functions import Lower

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Catalog product and the authoritative stock counter."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price_cents = models.PositiveIntegerField()
    stock = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=64, default="Accessories", db_index=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price_cents__gte=0),
                name="products_price_non_negative",
            ),
            models.UniqueConstraint(
                Lower("name"),
                name="products_name_ci_unique",
            ),
        ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                category=self.category,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
