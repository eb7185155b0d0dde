"""Domain events for the Carts bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class CartCheckedOut(DomainEvent):
    """Raised when a cart is converted into an order."""

    order_id: Optional[UUID] = None


@dataclass(frozen=True)
class CartAbandoned(DomainEvent):
    """Raised when the abandonment policy closes an idle cart."""
