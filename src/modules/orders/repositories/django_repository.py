"""Django ORM implementation of the Order repository.

The Order aggregate (Order + OrderLines) is written in one go inside the
caller's transaction; ``total_cents`` is computed from the lines before
the order row is inserted because orders cannot be updated afterwards.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.core.outbox import record_domain_events
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        lines = data["lines"]
        total = sum(line["quantity"] * line["unit_price_cents"] for line in lines)

        order = Order(
            customer_id=data["customer_id"],
            cart_id=data.get("cart_id"),
            source=data["source"],
            total_cents=total,
        )
        order.save()

        for line_data in lines:
            OrderLine(
                order=order,
                product_id=line_data["product_id"],
                quantity=line_data["quantity"],
                unit_price_cents=line_data["unit_price_cents"],
            ).save()

        logger.info(
            "order.created",
            order_id=str(order.id),
            order_number=order.order_number,
            line_count=len(lines),
            total_cents=total,
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def queryset(self) -> QuerySet[Order]:
        """Orders with customer and lines eager-loaded (prevents N+1)."""
        return Order.objects.select_related("customer").prefetch_related(
            "lines__product"
        )

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return self.queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def record_events(self, order: Order) -> int:
        return record_domain_events(order, topic="orders")
