"""Cart service layer (Use Cases).

Owns the active-cart lifecycle and its lines.  Write operations are
atomic; the service defines the unit-of-work boundary.

Business rules enforced:
- One active cart per customer (database constraint + re-read on conflict).
- Lock order: the cart row first, then the product row through the
  ``StockLedger``.
- Add-time guard: ``existing line quantity + requested <= stock`` under
  the product lock.  With ``CART_STOCK_GUARD = "reserved"`` the quantities
  held by other active carts count against stock as well.
- Repeated adds merge into one line; the first price snapshot sticks.
- Stock is never changed here; it is consumed only at checkout.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Callable, List, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.carts.constants import (
    STOCK_GUARD_LIVE,
    STOCK_GUARD_RESERVED,
    CartStatus,
)
from modules.carts.dtos import CartViewDTO
from modules.carts.events import CartAbandoned
from modules.core.exceptions import InvariantViolation
from modules.customers.exceptions import CustomerNotFound
from modules.products.exceptions import InsufficientStock
from modules.products.ledger import StockLedger

if TYPE_CHECKING:
    from modules.carts.dtos import AddCartItemDTO
    from modules.carts.models import Cart, CartLine
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CartService:
    """Application service for Cart use-cases.

    Receives repositories via constructor injection (DIP).  A fresh
    ``StockLedger`` is built per unit of work by ``ledger_factory``.
    """

    def __init__(
        self,
        cart_repository: ICartRepository,
        customer_repository: ICustomerRepository,
        ledger_factory: Callable[[], StockLedger] = StockLedger,
    ) -> None:
        self._cart_repo = cart_repository
        self._customer_repo = customer_repository
        self._ledger_factory = ledger_factory

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def ensure_active_cart(self, customer_id: UUID) -> Cart:
        """Return the customer's active cart, creating it if needed.

        Two concurrent callers may both miss the read and race to insert;
        the loser's insert hits the one-active-cart constraint inside its
        savepoint and re-reads the winner's cart.

        Raises:
            CustomerNotFound: the customer does not exist.
            InvariantViolation: no single active cart can be established.
        """
        if not self._customer_repo.exists(str(customer_id)):
            raise CustomerNotFound(f"Customer {customer_id} not found.")

        cart = self._single_active_cart(customer_id)
        if cart is not None:
            return cart

        try:
            with transaction.atomic():
                return self._cart_repo.create_active(customer_id)
        except IntegrityError:
            logger.info("cart.create_conflict", customer_id=str(customer_id))

        cart = self._single_active_cart(customer_id)
        if cart is None:
            raise InvariantViolation(
                f"Active cart of customer {customer_id} vanished after a "
                "creation conflict."
            )
        return cart

    @transaction.atomic
    def add_item(self, dto: AddCartItemDTO) -> CartLine:
        """Add ``dto.quantity`` units of a product to the active cart.

        Steps:
        1. Ensure and lock the active cart row.
        2. Lock the product row and read its live stock and price.
        3. Validate the merged quantity against the stock guard.
        4. Insert a new line (pinning the price) or increment the
           existing one (keeping its price).

        Raises:
            CustomerNotFound: the customer does not exist.
            ProductNotFound: the product does not exist.
            InsufficientStock: the merged quantity exceeds what the guard
                allows.  Nothing is written, not even a new cart.
        """
        log = logger.bind(
            customer_id=str(dto.customer_id),
            product_id=str(dto.product_id),
            quantity=dto.quantity,
        )

        cart = self._lock_active_cart(dto.customer_id)
        ledger = self._ledger_factory()
        snapshot = ledger.lock_and_get(dto.product_id)

        line = self._cart_repo.get_line(cart.id, snapshot.product_id)
        existing = line.quantity if line is not None else 0
        held_elsewhere = 0
        if self._stock_guard() == STOCK_GUARD_RESERVED:
            held_elsewhere = self._cart_repo.reserved_quantity(
                snapshot.product_id, exclude_cart_id=cart.id
            )

        requested = existing + dto.quantity
        available = max(snapshot.stock - held_elsewhere, 0)
        if requested > available:
            log.warning(
                "cart.add_rejected",
                cart_id=str(cart.id),
                requested=requested,
                available=available,
            )
            raise InsufficientStock(
                f"Product {snapshot.name}: requested {requested}, "
                f"available {available}.",
                product_id=snapshot.product_id,
                requested=requested,
                available=available,
            )

        if line is None:
            line = self._cart_repo.insert_line(
                cart.id,
                snapshot.product_id,
                quantity=dto.quantity,
                unit_price_cents=snapshot.price_cents,
            )
        else:
            line = self._cart_repo.increment_line(line, dto.quantity)
        self._cart_repo.touch(cart)

        log.info(
            "cart.item_added",
            cart_id=str(cart.id),
            line_quantity=line.quantity,
            unit_price_cents=line.unit_price_cents,
        )
        return line

    @transaction.atomic
    def remove_item(self, customer_id: UUID, product_id: UUID) -> bool:
        """Delete the product's line from the active cart.

        Idempotent: returns ``False`` when there is no active cart or no
        such line.
        """
        carts = self._cart_repo.list_active_for_update(customer_id)
        if len(carts) > 1:
            raise InvariantViolation(
                f"Customer {customer_id} has {len(carts)} active carts."
            )
        if not carts:
            return False

        cart = carts[0]
        removed = self._cart_repo.delete_line(cart.id, product_id)
        if removed:
            self._cart_repo.touch(cart)
        logger.info(
            "cart.item_removed",
            customer_id=str(customer_id),
            cart_id=str(cart.id),
            product_id=str(product_id),
            removed=removed,
        )
        return removed

    @transaction.atomic
    def abandon_stale_carts(self, older_than: Optional[timedelta] = None) -> int:
        """Move active carts idle for longer than *older_than* to ``abandoned``.

        Defaults to ``CART_ABANDON_AFTER_HOURS``.  Returns the number of
        carts abandoned.
        """
        if older_than is None:
            older_than = timedelta(hours=settings.CART_ABANDON_AFTER_HOURS)
        cutoff = timezone.now() - older_than

        abandoned = 0
        for cart in self._cart_repo.list_stale_for_update(cutoff):
            if not cart.can_transition_to(CartStatus.ABANDONED):
                continue
            cart.status = CartStatus.ABANDONED
            cart.add_domain_event(CartAbandoned(aggregate_id=cart.id))
            self._cart_repo.save(cart)
            abandoned += 1

        logger.info(
            "cart.stale_abandoned", count=abandoned, cutoff=cutoff.isoformat()
        )
        return abandoned

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def view_cart(self, customer_id: UUID) -> Optional[CartViewDTO]:
        """Return the active cart with priced lines, or ``None``."""
        cart = self._single_active_cart(customer_id)
        if cart is None:
            return None
        return CartViewDTO.from_entity(cart, self._cart_repo.lines(cart.id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _single_active_cart(self, customer_id: UUID) -> Optional[Cart]:
        carts: List[Cart] = self._cart_repo.list_active(customer_id)
        if len(carts) > 1:
            raise InvariantViolation(
                f"Customer {customer_id} has {len(carts)} active carts."
            )
        return carts[0] if carts else None

    def _lock_active_cart(self, customer_id: UUID) -> Cart:
        """Ensure the active cart and take its row lock.

        A checkout or abandonment may close the cart between the read and
        the lock; in that case a fresh active cart is ensured once more.
        """
        for _ in range(2):
            cart = self.ensure_active_cart(customer_id)
            locked = self._cart_repo.get_for_update(cart.id)
            if locked is not None and locked.is_active:
                return locked
            logger.info(
                "cart.closed_while_locking",
                customer_id=str(customer_id),
                cart_id=str(cart.id),
            )
        raise InvariantViolation(
            f"Could not lock an active cart for customer {customer_id}."
        )

    @staticmethod
    def _stock_guard() -> str:
        guard = getattr(settings, "CART_STOCK_GUARD", STOCK_GUARD_LIVE)
        if guard not in (STOCK_GUARD_LIVE, STOCK_GUARD_RESERVED):
            raise ImproperlyConfigured(
                f"CART_STOCK_GUARD must be '{STOCK_GUARD_LIVE}' or "
                f"'{STOCK_GUARD_RESERVED}', got {guard!r}."
            )
        return guard
