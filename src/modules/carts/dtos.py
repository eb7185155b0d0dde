"""Cart DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``AddCartItemDTO``: input for adding a product to the active cart.
- ``CartLineViewDTO``: one priced line of a cart view.
- ``CartViewDTO``: the active cart with its lines and total.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.carts.models import Cart, CartLine


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class AddCartItemDTO(BaseModel):
    """Immutable DTO for add-to-cart requests.

    The price is never supplied by the caller: it is read from the locked
    product row when the line is first created.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class CartLineViewDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    quantity: int
    unit_price_cents: int
    line_total_cents: int

    @classmethod
    def from_entity(cls, line: CartLine) -> CartLineViewDTO:
        return cls(
            product_id=line.product_id,
            name=line.product.name,  # type: ignore[attr-defined]
            quantity=line.quantity,
            unit_price_cents=line.unit_price_cents,
            line_total_cents=line.line_total_cents,
        )


class CartViewDTO(BaseModel):
    """Immutable view of an active cart, priced at the pinned snapshots."""

    model_config = ConfigDict(frozen=True)

    cart_id: UUID
    customer_id: UUID
    items: List[CartLineViewDTO]
    total_cents: int

    @classmethod
    def from_entity(cls, cart: Cart, lines: Iterable[CartLine]) -> CartViewDTO:
        items = [CartLineViewDTO.from_entity(line) for line in lines]
        return cls(
            cart_id=cart.id,
            customer_id=cart.customer_id,
            items=items,
            total_cents=sum(item.line_total_cents for item in items),
        )
