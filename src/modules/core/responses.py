"""HTTP rendering of domain errors."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework.response import Response

from modules.core.exceptions import DomainError
from modules.products.exceptions import InsufficientStock


def error_response(exc: DomainError, http_status: int) -> Response:
    """Render a domain error as ``{"detail", "code"}``.

    Stock failures also report the product and the quantities involved.
    """
    body: Dict[str, Any] = {"detail": str(exc), "code": exc.code}
    if isinstance(exc, InsufficientStock):
        body.update(
            product_id=str(exc.product_id) if exc.product_id else None,
            requested=exc.requested,
            available=exc.available,
        )
    return Response(body, status=http_status)
