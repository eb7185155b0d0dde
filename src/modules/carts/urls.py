"""Cart URL configuration.

Checkout lives with the orders module (``modules.orders.urls``).
"""

from __future__ import annotations

from django.urls import path

from modules.carts.views import CartViewSet

cart = CartViewSet.as_view({"get": "retrieve", "post": "create"})
cart_items = CartViewSet.as_view({"post": "add_item"})
cart_item_detail = CartViewSet.as_view({"delete": "remove_item"})

urlpatterns = [
    path("customers/<uuid:customer_id>/cart/", cart, name="customer-cart"),
    path(
        "customers/<uuid:customer_id>/cart/items/",
        cart_items,
        name="customer-cart-items",
    ),
    path(
        "customers/<uuid:customer_id>/cart/items/<uuid:product_id>/",
        cart_item_detail,
        name="customer-cart-item-detail",
    ),
]
