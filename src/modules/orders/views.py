"""Order API views.

``OrderViewSet`` serves the order history; ``CustomerOrderViewSet``
places orders for the customer named in the URL (cart checkout and
direct purchase).  Domain exceptions are caught and translated into HTTP
status codes; the views never swallow generic exceptions.
"""

from __future__ import annotations

from uuid import UUID

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.carts.exceptions import EmptyCart, NoActiveCart
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.core.exceptions import InvariantViolation, NotFound
from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import error_response
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import DirectPurchaseDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    DirectPurchaseSerializer,
    OrderListSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService
from modules.products.exceptions import InsufficientStock


def _build_service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        cart_repository=CartDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )


class OrderViewSet(GenericViewSet):
    """Read-only order history.

    Does **not** extend ``ModelViewSet``: orders are created only by the
    customer endpoints below and are never edited.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total_cents"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def get_queryset(self):
        return OrderDjangoRepository().queryset()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (source, customer, date range, total range) is handled
        by ``OrderFilter``; results are paginated, newest first.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk or "")
        except OrderNotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)


class CustomerOrderViewSet(GenericViewSet):
    """Order placement for one customer (routes mapped in ``urls.py``)."""

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    pagination_class = None
    throttle_scope = "checkout"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def checkout(self, request: Request, customer_id: UUID) -> Response:
        """POST /api/v1/customers/{customer_id}/cart/checkout/"""
        try:
            order = self._service.checkout(customer_id)
        except NoActiveCart as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        except EmptyCart as exc:
            return error_response(exc, status.HTTP_400_BAD_REQUEST)
        except InsufficientStock as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)
        except NotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def create(self, request: Request, customer_id: UUID) -> Response:
        """POST /api/v1/customers/{customer_id}/orders/ (direct purchase)"""
        serializer = DirectPurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = DirectPurchaseDTO(customer_id=customer_id, **serializer.validated_data)

        try:
            order = self._service.direct_purchase(dto)
        except NotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        except InsufficientStock as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)
        except InvariantViolation as exc:
            return error_response(exc, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
