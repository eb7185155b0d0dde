"""Order and OrderLine models.

Business rules implemented:
- Orders and their lines are immutable after insert; any later save
  raises ``InvariantViolation``.
- Order number auto-generated as human-readable identifier.
- Customer FK uses PROTECT to preserve purchase history.
- The cart FK is kept for checkout orders and cleared (SET_NULL) if the
  cart is ever deleted; direct purchases have no cart.
- OrderLine snapshots the price at purchase time (``unit_price_cents``)
  and ``line_total_cents`` is always ``quantity * unit_price_cents``.
- ``total_cents`` is the sum of the line totals, fixed before insert.
"""

from __future__ import annotations

import secrets
from typing import Any

import structlog
from django.db import models
from django.utils import timezone

from modules.core.exceptions import InvariantViolation
from modules.core.models import BaseModel
from modules.orders.constants import ORDER_NUMBER_MAX_RETRIES, OrderSource
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``order_number`` is a human-readable identifier auto-generated on
    insert (format: ``ORD-YYYYMMDD-XXXXXX``).  The UUIDv7 ``id`` is used for
    all internal references and API lookups.
    """

    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    cart: models.ForeignKey = models.ForeignKey(
        "carts.Cart",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    source: models.CharField = models.CharField(
        max_length=10,
        choices=OrderSource.choices,
    )
    total_cents: models.PositiveBigIntegerField = models.PositiveBigIntegerField(
        default=0
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="orders_customer_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Order number generation
    # ------------------------------------------------------------------

    @staticmethod
    def generate_order_number() -> str:
        """Generate a human-readable order number: ``ORD-YYYYMMDD-XXXXXX``."""
        now = timezone.now()
        suffix = secrets.token_hex(3).upper()
        return f"ORD-{now:%Y%m%d}-{suffix}"

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise InvariantViolation(f"Order {self.order_number} is immutable.")
        if not self.order_number:
            for attempt in range(ORDER_NUMBER_MAX_RETRIES):
                candidate = self.generate_order_number()
                if not Order.objects.filter(order_number=candidate).exists():
                    self.order_number = candidate
                    break
            else:
                raise RuntimeError(
                    f"Failed to generate unique order_number after "
                    f"{ORDER_NUMBER_MAX_RETRIES} attempts"
                )
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_number} ({self.source})"


class OrderLine(BaseModel):
    """Line linking an Order to a Product at a fixed price.

    ``unit_price_cents`` comes from the cart line snapshot (checkout) or
    from the locked product row (direct purchase) and never changes.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_lines",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField()
    unit_price_cents: models.PositiveIntegerField = models.PositiveIntegerField()
    line_total_cents: models.PositiveBigIntegerField = models.PositiveBigIntegerField(
        editable=False
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "product"],
                name="order_lines_unique_product",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise InvariantViolation("Order lines are immutable.")
        self.line_total_cents = self.quantity * self.unit_price_cents
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} ({self.line_total_cents})"
