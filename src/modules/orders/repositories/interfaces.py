"""Order repository interface.

Extends ``IRepository[Order]`` with the methods the Order aggregate
needs: creation together with its lines, and recording the domain
events of a freshly placed order.  Orders are never updated.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order with its lines.

        ``data`` must include ``customer_id``, ``source`` and ``lines``
        (dicts with ``product_id``, ``quantity``, ``unit_price_cents``);
        ``cart_id`` is optional.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched lines."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders, newest first, with optional filters."""

    @abstractmethod
    def record_events(self, order: Order) -> int:
        """Write the order's collected domain events to the outbox."""
