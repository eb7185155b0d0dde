"""Customer domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFound


class CustomerNotFound(NotFound):
    """The customer named by a cart or order operation does not exist."""
