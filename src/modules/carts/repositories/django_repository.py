"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db.models import F, Sum

from modules.carts.constants import CartStatus
from modules.carts.models import Cart, CartLine
from modules.carts.repositories.interfaces import ICartRepository
from modules.core.outbox import record_domain_events

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Cart rows
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Cart]:
        try:
            return Cart.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Cart]:
        queryset = Cart.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_active(self, customer_id: UUID) -> List[Cart]:
        return list(
            Cart.objects.filter(customer_id=customer_id, status=CartStatus.ACTIVE)
        )

    def create_active(self, customer_id: UUID) -> Cart:
        cart = Cart.objects.create(customer_id=customer_id, status=CartStatus.ACTIVE)
        logger.info("cart.created", cart_id=str(cart.id), customer_id=str(customer_id))
        return cart

    def get_for_update(self, id: UUID) -> Optional[Cart]:
        return Cart.objects.select_for_update().filter(id=id).first()

    def list_active_for_update(self, customer_id: UUID) -> List[Cart]:
        return list(
            Cart.objects.select_for_update().filter(
                customer_id=customer_id, status=CartStatus.ACTIVE
            )
        )

    def save(self, cart: Cart) -> Cart:
        cart.save()
        record_domain_events(cart, topic="carts")
        logger.info("cart.saved", cart_id=str(cart.id), status=cart.status)
        return cart

    def touch(self, cart: Cart) -> None:
        cart.save(update_fields=["updated_at"])

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def lines(self, cart_id: UUID) -> List[CartLine]:
        return list(
            CartLine.objects.select_related("product")
            .filter(cart_id=cart_id)
            .order_by("product__name")
        )

    def get_line(self, cart_id: UUID, product_id: UUID) -> Optional[CartLine]:
        return CartLine.objects.filter(cart_id=cart_id, product_id=product_id).first()

    def insert_line(
        self, cart_id: UUID, product_id: UUID, quantity: int, unit_price_cents: int
    ) -> CartLine:
        return CartLine.objects.create(
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            unit_price_cents=unit_price_cents,
        )

    def increment_line(self, line: CartLine, quantity: int) -> CartLine:
        line.quantity = F("quantity") + quantity
        line.save(update_fields=["quantity"])
        line.refresh_from_db(fields=["quantity"])
        return line

    def delete_line(self, cart_id: UUID, product_id: UUID) -> bool:
        try:
            deleted, _ = CartLine.objects.filter(
                cart_id=cart_id, product_id=product_id
            ).delete()
        except (ValueError, ValidationError):
            return False
        return deleted > 0

    def reserved_quantity(self, product_id: UUID, exclude_cart_id: UUID) -> int:
        total = (
            CartLine.objects.filter(
                product_id=product_id, cart__status=CartStatus.ACTIVE
            )
            .exclude(cart_id=exclude_cart_id)
            .aggregate(total=Sum("quantity"))["total"]
        )
        return total or 0

    def list_stale_for_update(self, cutoff: datetime) -> List[Cart]:
        return list(
            Cart.objects.select_for_update()
            .filter(status=CartStatus.ACTIVE, updated_at__lt=cutoff)
            .order_by("id")
        )
