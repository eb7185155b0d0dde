"""Cart domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError


class NoActiveCart(DomainError):
    """The customer has no active cart to check out."""

    code = "no_active_cart"


class EmptyCart(DomainError):
    """The active cart has no lines to check out."""

    code = "empty_cart"
