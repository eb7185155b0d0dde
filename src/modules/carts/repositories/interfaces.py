"""Cart repository interface.

The Cart aggregate includes its CartLine children.  Line upserts are two
explicit operations (``insert_line`` / ``increment_line``) chosen by the
service, not a database-specific conflict clause.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.carts.models import Cart, CartLine


class ICartRepository(IRepository["Cart"]):
    """Repository contract for the Cart aggregate root."""

    @abstractmethod
    def list_active(self, customer_id: UUID) -> List[Cart]:
        """All active carts of a customer (never more than one when healthy)."""

    @abstractmethod
    def create_active(self, customer_id: UUID) -> Cart:
        """Insert a new active cart; raises ``IntegrityError`` if one exists."""

    @abstractmethod
    def get_for_update(self, id: UUID) -> Optional[Cart]:
        """Retrieve a cart with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list_active_for_update(self, customer_id: UUID) -> List[Cart]:
        """Lock and return the customer's active cart rows."""

    @abstractmethod
    def save(self, cart: Cart) -> Cart:
        """Persist cart status/activity and record its domain events."""

    @abstractmethod
    def touch(self, cart: Cart) -> None:
        """Refresh the cart's last-activity timestamp."""

    @abstractmethod
    def lines(self, cart_id: UUID) -> List[CartLine]:
        """Lines of a cart with their products, ordered by product name."""

    @abstractmethod
    def get_line(self, cart_id: UUID, product_id: UUID) -> Optional[CartLine]:
        """The cart's line for *product_id*, if any."""

    @abstractmethod
    def insert_line(
        self, cart_id: UUID, product_id: UUID, quantity: int, unit_price_cents: int
    ) -> CartLine:
        """Create a new line with its price snapshot."""

    @abstractmethod
    def increment_line(self, line: CartLine, quantity: int) -> CartLine:
        """Add *quantity* to an existing line, leaving its price untouched."""

    @abstractmethod
    def delete_line(self, cart_id: UUID, product_id: UUID) -> bool:
        """Delete the line; ``True`` if a row was removed."""

    @abstractmethod
    def reserved_quantity(self, product_id: UUID, exclude_cart_id: UUID) -> int:
        """Units of *product_id* held by active carts other than *exclude_cart_id*."""

    @abstractmethod
    def list_stale_for_update(self, cutoff: datetime) -> List[Cart]:
        """Lock active carts whose last activity is older than *cutoff*."""
