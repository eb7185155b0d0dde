"""Order service layer (Use Cases).

The only place where stock is consumed.  Both commands run as a single
atomic unit of work: any failure after row locks are taken rolls back
every write, including stock decrements and the new order.

Business rules enforced:
- Lock order: the customer's active cart row, then product rows in
  ascending id (``StockLedger.lock_many``).
- Checkout validates every line against locked stock before anything
  is written; one short line aborts the whole checkout.
- Order lines use the cart's price snapshots; a direct purchase uses the
  locked product's current price.
- A checked-out cart moves ``active -> checked_out`` in the same unit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.carts.constants import CartStatus
from modules.carts.events import CartCheckedOut
from modules.carts.exceptions import EmptyCart, NoActiveCart
from modules.core.exceptions import InvariantViolation
from modules.customers.exceptions import CustomerNotFound
from modules.orders.constants import OrderSource
from modules.orders.events import OrderPlaced
from modules.orders.exceptions import OrderNotFound
from modules.products.exceptions import InsufficientStock
from modules.products.ledger import StockLedger

if TYPE_CHECKING:
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import DirectPurchaseDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        cart_repository: ICartRepository,
        customer_repository: ICustomerRepository,
        ledger_factory: Callable[[], StockLedger] = StockLedger,
    ) -> None:
        self._order_repo = order_repository
        self._cart_repo = cart_repository
        self._customer_repo = customer_repository
        self._ledger_factory = ledger_factory

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def checkout(self, customer_id: UUID) -> Order:
        """Convert the customer's active cart into an order.

        Steps:
        1. Lock the active cart row.
        2. Load its lines.
        3. Lock every product row in ascending id order.
        4. Validate all lines against the locked stock.
        5. Decrement stock, insert the order, close the cart.

        Raises:
            NoActiveCart: the customer has no active cart.
            EmptyCart: the active cart has no lines.
            InsufficientStock: a line exceeds its product's stock.
        """
        log = logger.bind(customer_id=str(customer_id))
        log.info("order.checkout_started")

        carts = self._cart_repo.list_active_for_update(customer_id)
        if len(carts) > 1:
            raise InvariantViolation(
                f"Customer {customer_id} has {len(carts)} active carts."
            )
        if not carts:
            raise NoActiveCart(f"Customer {customer_id} has no active cart.")
        cart = carts[0]
        log = log.bind(cart_id=str(cart.id))

        lines = self._cart_repo.lines(cart.id)
        if not lines:
            raise EmptyCart(f"Cart {cart.id} is empty.")

        ledger = self._ledger_factory()
        locked = ledger.lock_many(line.product_id for line in lines)

        for line in lines:
            snapshot = locked[line.product_id]
            if line.quantity > snapshot.stock:
                log.warning(
                    "order.checkout_rejected",
                    product_id=str(line.product_id),
                    requested=line.quantity,
                    available=snapshot.stock,
                )
                raise InsufficientStock(
                    f"Product {snapshot.name}: requested {line.quantity}, "
                    f"available {snapshot.stock}.",
                    product_id=line.product_id,
                    requested=line.quantity,
                    available=snapshot.stock,
                )

        for line in sorted(lines, key=lambda item: item.product_id):
            ledger.decrement(line.product_id, line.quantity)

        order = self._order_repo.create(
            {
                "customer_id": customer_id,
                "cart_id": cart.id,
                "source": OrderSource.CART,
                "lines": [
                    {
                        "product_id": line.product_id,
                        "quantity": line.quantity,
                        "unit_price_cents": line.unit_price_cents,
                    }
                    for line in lines
                ],
            }
        )

        if not cart.can_transition_to(CartStatus.CHECKED_OUT):
            raise InvariantViolation(f"Cart {cart.id} cannot be checked out.")
        cart.status = CartStatus.CHECKED_OUT
        cart.add_domain_event(CartCheckedOut(aggregate_id=cart.id, order_id=order.id))
        self._cart_repo.save(cart)

        self._record_placed(order)
        log.info(
            "order.checkout_completed",
            order_id=str(order.id),
            total_cents=order.total_cents,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def direct_purchase(self, dto: DirectPurchaseDTO) -> Order:
        """Buy one product immediately, without touching the cart.

        Raises:
            CustomerNotFound: the customer does not exist.
            ProductNotFound: the product does not exist.
            InsufficientStock: ``dto.quantity`` exceeds the locked stock.
        """
        log = logger.bind(
            customer_id=str(dto.customer_id),
            product_id=str(dto.product_id),
            quantity=dto.quantity,
        )
        log.info("order.direct_purchase_started")

        if not self._customer_repo.exists(str(dto.customer_id)):
            raise CustomerNotFound(f"Customer {dto.customer_id} not found.")

        ledger = self._ledger_factory()
        snapshot = ledger.lock_and_get(dto.product_id)
        ledger.decrement(snapshot.product_id, dto.quantity)

        order = self._order_repo.create(
            {
                "customer_id": dto.customer_id,
                "source": OrderSource.DIRECT,
                "lines": [
                    {
                        "product_id": snapshot.product_id,
                        "quantity": dto.quantity,
                        "unit_price_cents": snapshot.price_cents,
                    }
                ],
            }
        )

        self._record_placed(order)
        log.info(
            "order.direct_purchase_completed",
            order_id=str(order.id),
            total_cents=order.total_cents,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return orders, newest first, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record_placed(self, order: Order) -> None:
        order.add_domain_event(
            OrderPlaced(
                aggregate_id=order.id,
                customer_id=order.customer_id,
                source=order.source,
                total_cents=order.total_cents,
            )
        )
        self._order_repo.record_events(order)
