"""Stock Ledger: the only writer of ``Product.stock``.

A ledger instance belongs to one unit of work (one ``transaction.atomic``
block).  ``lock_and_get`` takes ``SELECT ... FOR UPDATE`` on a product row
and remembers the locked instance; ``decrement`` only accepts rows this
ledger locked, so stock can never be changed without holding the lock.
Row locks are released by the database when the transaction commits or
rolls back, never by the ledger.

Multi-product operations must go through ``lock_many``, which locks rows
in ascending product id.  Two checkouts over overlapping product sets then
always contend on the same first row instead of waiting on each other in a
cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Union
from uuid import UUID

import structlog
from django.db import transaction

from modules.core.exceptions import InvariantViolation
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

ProductId = Union[UUID, str]


@dataclass(frozen=True)
class StockSnapshot:
    """Price and stock of a product row as seen under its lock."""

    product_id: UUID
    name: str
    price_cents: int
    stock: int


def _as_uuid(product_id: ProductId) -> UUID:
    if isinstance(product_id, UUID):
        return product_id
    try:
        return UUID(str(product_id))
    except ValueError as exc:
        raise ProductNotFound(f"Product {product_id} not found.") from exc


class StockLedger:
    """Row-locking stock authority for a single unit of work."""

    def __init__(self, repository: Optional[IProductRepository] = None) -> None:
        self._repo = repository or ProductDjangoRepository()
        self._locked: Dict[UUID, Product] = {}

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------

    def lock_and_get(self, product_id: ProductId) -> StockSnapshot:
        """Lock the product row and return its current price and stock.

        Raises:
            InvariantViolation: called outside a transaction.
            ProductNotFound: the product does not exist.
        """
        if not transaction.get_connection().in_atomic_block:
            raise InvariantViolation(
                "Product rows can only be locked inside a transaction."
            )

        pid = _as_uuid(product_id)
        product = self._locked.get(pid)
        if product is None:
            product = self._repo.get_for_update(str(pid))
            if product is None:
                raise ProductNotFound(f"Product {pid} not found.")
            self._locked[pid] = product
            logger.debug("ledger.row_locked", product_id=str(pid), stock=product.stock)
        return self._snapshot(product)

    def lock_many(self, product_ids: Iterable[ProductId]) -> Dict[UUID, StockSnapshot]:
        """Lock several product rows in ascending id order."""
        ordered = sorted({_as_uuid(pid) for pid in product_ids})
        return {pid: self.lock_and_get(pid) for pid in ordered}

    def is_locked(self, product_id: ProductId) -> bool:
        return _as_uuid(product_id) in self._locked

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def decrement(self, product_id: ProductId, quantity: int) -> StockSnapshot:
        """Consume *quantity* units of a row locked by this ledger.

        Raises:
            InvariantViolation: the row was not locked by this ledger.
            InsufficientStock: *quantity* exceeds the locked stock.
        """
        pid = _as_uuid(product_id)
        product = self._locked.get(pid)
        if product is None:
            raise InvariantViolation(
                f"Product {pid} must be locked before its stock is decremented."
            )
        if quantity < 1:
            raise InvariantViolation(f"Cannot decrement stock by {quantity}.")
        if quantity > product.stock:
            raise InsufficientStock(
                f"Product {product.name}: requested {quantity}, "
                f"available {product.stock}.",
                product_id=pid,
                requested=quantity,
                available=product.stock,
            )

        product.stock -= quantity
        self._repo.save_stock(product)
        logger.info(
            "ledger.stock_decremented",
            product_id=str(pid),
            quantity=quantity,
            remaining=product.stock,
        )
        return self._snapshot(product)

    @staticmethod
    def _snapshot(product: Product) -> StockSnapshot:
        return StockSnapshot(
            product_id=product.id,
            name=product.name,
            price_cents=product.price_cents,
            stock=product.stock,
        )
