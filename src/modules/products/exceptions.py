"""Product and stock domain exceptions.

Raised by the Stock Ledger and the services that use it.  The API layer
(Views) catches these and translates them into HTTP responses.
"""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import DomainError, NotFound


class ProductNotFound(NotFound):
    """The referenced product does not exist."""


class InsufficientStock(DomainError):
    """The requested quantity exceeds the currently locked stock."""

    code = "insufficient_stock"

    def __init__(
        self,
        message: str,
        *,
        product_id: Any = None,
        requested: int | None = None,
        available: int | None = None,
    ) -> None:
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available
