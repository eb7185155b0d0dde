"""Asynchronous tasks of the carts module."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

import structlog
from celery import shared_task

from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.carts.services import CartService
from modules.customers.repositories.django_repository import CustomerDjangoRepository

logger = structlog.get_logger(__name__)


@shared_task(name="carts.abandon_stale_carts")
def abandon_stale_carts(older_than_hours: Optional[int] = None) -> int:
    """Abandon carts idle for ``CART_ABANDON_AFTER_HOURS`` (or the override)."""
    service = CartService(
        cart_repository=CartDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )
    older_than = (
        timedelta(hours=older_than_hours) if older_than_hours is not None else None
    )
    count = service.abandon_stale_carts(older_than)
    logger.info("cart.abandon_task_finished", abandoned=count)
    return count
