"""Cart API views.

Exposes the ``CartService`` over HTTP.  The customer is always named
explicitly in the URL.  Domain exceptions are caught kind by kind and
translated into HTTP status codes; nothing else is swallowed.
"""

from __future__ import annotations

from typing import Any, Dict
from uuid import UUID

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.carts.dtos import AddCartItemDTO
from modules.carts.models import Cart
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.carts.serializers import (
    AddCartItemSerializer,
    CartLineSerializer,
    CartViewSerializer,
)
from modules.carts.services import CartService
from modules.core.exceptions import InvariantViolation, NotFound
from modules.core.responses import error_response
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.products.exceptions import InsufficientStock


class CartViewSet(GenericViewSet):
    """The customer's active cart and its lines.

    Routes are mapped explicitly in ``urls.py`` because every action is
    nested under ``customers/{customer_id}/cart/``.
    """

    queryset = Cart.objects.all()
    serializer_class = CartViewSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CartService(
            cart_repository=CartDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        if self.action in {"create", "add_item", "remove_item"}:
            self.throttle_scope = "cart_mutation"
        else:
            self.throttle_scope = None
        return super().get_throttles()

    def create(self, request: Request, customer_id: UUID) -> Response:
        """POST /api/v1/customers/{customer_id}/cart/"""
        try:
            cart = self._service.ensure_active_cart(customer_id)
        except NotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)
        return Response({"cart_id": str(cart.id)})

    def retrieve(self, request: Request, customer_id: UUID) -> Response:
        """GET /api/v1/customers/{customer_id}/cart/

        A customer without an active cart gets an empty view, not a 404.
        """
        try:
            view = self._service.view_cart(customer_id)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)

        if view is None:
            data: Dict[str, Any] = {
                "cart_id": None,
                "customer_id": customer_id,
                "items": [],
                "total_cents": 0,
            }
        else:
            data = view.model_dump()
        return Response(CartViewSerializer(data).data)

    def add_item(self, request: Request, customer_id: UUID) -> Response:
        """POST /api/v1/customers/{customer_id}/cart/items/"""
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = AddCartItemDTO(customer_id=customer_id, **serializer.validated_data)

        try:
            line = self._service.add_item(dto)
        except NotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        except InsufficientStock as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)

        return Response(CartLineSerializer(line).data, status=status.HTTP_201_CREATED)

    def remove_item(
        self, request: Request, customer_id: UUID, product_id: UUID
    ) -> Response:
        """DELETE /api/v1/customers/{customer_id}/cart/items/{product_id}/"""
        try:
            removed = self._service.remove_item(customer_id, product_id)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)
        return Response({"removed": removed})
