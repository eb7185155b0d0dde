"""Event handlers for Cart domain events."""

from __future__ import annotations

import structlog

from modules.carts.events import CartAbandoned, CartCheckedOut
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class CartCheckedOutHandler(IEventHandler[CartCheckedOut]):
    def handle(self, event: CartCheckedOut) -> None:
        logger.info(
            "cart.event.checked_out",
            cart_id=str(event.aggregate_id),
            order_id=str(event.order_id) if event.order_id else None,
        )


class CartAbandonedHandler(IEventHandler[CartAbandoned]):
    def handle(self, event: CartAbandoned) -> None:
        logger.info("cart.event.abandoned", cart_id=str(event.aggregate_id))


cart_checked_out_handler = CartCheckedOutHandler()
cart_abandoned_handler = CartAbandonedHandler()
