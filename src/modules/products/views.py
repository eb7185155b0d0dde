"""Product API views (read-only catalog browse)."""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.responses import error_response
from modules.products.dtos import ProductSearchDTO
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSearchSerializer, ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(GenericViewSet):
    """Catalog listing, search, categories and featured products.

    Catalog editing is not exposed: products are seeded by management
    commands and their stock changes only through carts and orders.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?q=&category=&max_price_cents="""
        params = ProductSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        if not (data.get("q") or data.get("category") or data.get("max_price_cents")):
            products = self._service.list_products()
        else:
            dto = ProductSearchDTO(
                q=data.get("q", ""),
                category=data.get("category") or None,
                max_price_cents=data.get("max_price_cents"),
            )
            products = self._service.search_products(dto)

        serializer = ProductSerializer(products, many=True)
        return Response({"count": len(products), "results": serializer.data})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk or "")
        except ProductNotFound as exc:
            return error_response(exc, status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"])
    def categories(self, request: Request) -> Response:
        """GET /api/v1/products/categories/"""
        return Response({"categories": self._service.list_categories()})

    @action(detail=False, methods=["get"])
    def featured(self, request: Request) -> Response:
        """GET /api/v1/products/featured/"""
        products = self._service.list_featured()
        return Response({"results": ProductSerializer(products, many=True).data})
