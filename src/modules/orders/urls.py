"""Order URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.orders.views import CustomerOrderViewSet, OrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

checkout = CustomerOrderViewSet.as_view({"post": "checkout"})
direct_purchase = CustomerOrderViewSet.as_view({"post": "create"})

urlpatterns = [
    path(
        "customers/<uuid:customer_id>/cart/checkout/",
        checkout,
        name="customer-cart-checkout",
    ),
    path(
        "customers/<uuid:customer_id>/orders/",
        direct_purchase,
        name="customer-orders",
    ),
    *router.urls,
]
