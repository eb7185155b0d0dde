"""Order domain exceptions.

Checkout and direct purchase also raise the stock, cart and customer
errors of their own modules; only order look-ups live here.
"""

from __future__ import annotations

from modules.core.exceptions import NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""
