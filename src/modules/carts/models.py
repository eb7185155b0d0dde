"""Cart and CartLine models.

Business rules implemented:
- At most one ``active`` cart per customer, enforced by a partial unique
  constraint (the service falls back to re-reading on conflict).
- One line per (cart, product); repeated adds merge into that line.
- ``unit_price_cents`` is pinned when the line is first created and is
  never re-read from the product on later merges.
- Line quantity is always positive; removing a line deletes the row.
- Lines die with their cart (CASCADE); products referenced by a line
  cannot be deleted (PROTECT).
"""

from __future__ import annotations

from typing import Any

from django.db import models

from modules.carts.constants import TERMINAL_STATES, VALID_TRANSITIONS, CartStatus
from modules.core.models import BaseModel
from shared.domain.events import DomainEventMixin


class Cart(DomainEventMixin, BaseModel):
    """Shopping cart aggregate root.

    ``updated_at`` doubles as the last-activity marker used by the
    abandonment policy.
    """

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="carts",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=CartStatus.choices,
        default=CartStatus.ACTIVE,
    )

    class Meta:
        db_table = "carts"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["customer"],
                condition=models.Q(status=CartStatus.ACTIVE),
                name="carts_one_active_per_customer",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "updated_at"], name="carts_status_updated_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == CartStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the cart is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __str__(self) -> str:
        return f"Cart {self.id} ({self.status})"


class CartLine(BaseModel):
    """A product and quantity reserved in a cart, with its price snapshot."""

    cart: models.ForeignKey = models.ForeignKey(
        "carts.Cart",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="cart_lines",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField()
    unit_price_cents: models.PositiveIntegerField = models.PositiveIntegerField()

    class Meta:
        db_table = "cart_lines"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product"],
                name="cart_lines_unique_product",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="cart_lines_quantity_positive",
            ),
        ]

    @property
    def line_total_cents(self) -> int:
        return self.quantity * self.unit_price_cents

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price_cents is None:
            self.unit_price_cents = self.product.price_cents
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.unit_price_cents}"
