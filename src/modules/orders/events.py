"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """Raised when a checkout or direct purchase commits an order."""

    customer_id: Optional[UUID] = None
    source: str = ""
    total_cents: int = 0
