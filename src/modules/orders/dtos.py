"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class DirectPurchaseDTO(BaseModel):
    """Immutable DTO for a one-product purchase that bypasses the cart.

    The price is resolved by the Service Layer from the locked product row.
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
