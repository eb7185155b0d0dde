"""Integration tests for checkout, direct purchase and order history.

Covers:
- POST /api/v1/customers/{id}/cart/checkout/ (201, 404, 400, 409).
- POST /api/v1/customers/{id}/orders/ (201, 404, 409, 400).
- GET /api/v1/orders/ (pagination, filters) and /api/v1/orders/{id}/.
"""

from __future__ import annotations

import uuid

import pytest

from modules.carts.constants import CartStatus
from modules.carts.models import Cart
from modules.orders.models import Order

pytestmark = pytest.mark.integration


def checkout_url(customer_id) -> str:
    return f"/api/v1/customers/{customer_id}/cart/checkout/"


def orders_url(customer_id) -> str:
    return f"/api/v1/customers/{customer_id}/orders/"


@pytest.fixture()
def add_to_cart(api_client):
    def _add(customer, product, quantity):
        response = api_client.post(
            f"/api/v1/customers/{customer.id}/cart/items/",
            {"product_id": str(product.id), "quantity": quantity},
            format="json",
        )
        assert response.status_code == 201
        return response

    return _add


@pytest.fixture()
def buy(api_client):
    def _buy(customer, product, quantity=1):
        return api_client.post(
            orders_url(customer.id),
            {"product_id": str(product.id), "quantity": quantity},
            format="json",
        )

    return _buy


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------


class TestCheckout:
    def test_creates_order_from_cart(self, api_client, customer, make_product, add_to_cart):
        tee = make_product(name="Classic Tee", price_cents=100, stock=10)
        cap = make_product(name="Classic Cap", price_cents=250, stock=2)
        add_to_cart(customer, tee, 2)
        add_to_cart(customer, cap, 2)

        response = api_client.post(checkout_url(customer.id))

        assert response.status_code == 201
        data = response.json()
        assert data["total_cents"] == 700
        assert data["source"] == "cart"
        assert data["customer_id"] == str(customer.id)
        assert data["order_number"].startswith("ORD-")
        assert len(data["lines"]) == 2
        tee.refresh_from_db()
        cap.refresh_from_db()
        assert (tee.stock, cap.stock) == (8, 0)
        assert Cart.objects.get(id=data["cart_id"]).status == CartStatus.CHECKED_OUT

    def test_no_cart_returns_404(self, api_client, customer):
        response = api_client.post(checkout_url(customer.id))
        assert response.status_code == 404
        assert response.json()["code"] == "no_active_cart"

    def test_empty_cart_returns_400(self, api_client, customer):
        api_client.post(f"/api/v1/customers/{customer.id}/cart/")
        response = api_client.post(checkout_url(customer.id))
        assert response.status_code == 400
        assert response.json()["code"] == "empty_cart"

    def test_short_stock_returns_409_and_keeps_cart(
        self, api_client, customer, make_product, add_to_cart
    ):
        product = make_product(stock=3)
        add_to_cart(customer, product, 3)
        type(product).objects.filter(id=product.id).update(stock=2)

        response = api_client.post(checkout_url(customer.id))

        assert response.status_code == 409
        data = response.json()
        assert data["code"] == "insufficient_stock"
        assert (data["requested"], data["available"]) == (3, 2)
        product.refresh_from_db()
        assert product.stock == 2
        assert Cart.objects.get(customer=customer).status == CartStatus.ACTIVE
        assert not Order.objects.exists()


# ---------------------------------------------------------------------------
# Direct purchase
# ---------------------------------------------------------------------------


class TestDirectPurchase:
    def test_creates_order(self, customer, make_product, buy):
        product = make_product(price_cents=1999, stock=4)

        response = buy(customer, product, 3)

        assert response.status_code == 201
        data = response.json()
        assert data["source"] == "direct"
        assert data["cart_id"] is None
        assert data["total_cents"] == 5997
        assert data["lines"][0]["product_name"] == product.name
        product.refresh_from_db()
        assert product.stock == 1

    def test_insufficient_stock_returns_409(self, customer, make_product, buy):
        product = make_product(stock=1)
        response = buy(customer, product, 2)
        assert response.status_code == 409
        assert response.json()["code"] == "insufficient_stock"

    def test_unknown_customer_returns_404(self, make_product, api_client):
        response = api_client.post(
            orders_url(uuid.uuid4()),
            {"product_id": str(make_product().id), "quantity": 1},
            format="json",
        )
        assert response.status_code == 404

    def test_unknown_product_returns_404(self, customer, api_client):
        response = api_client.post(
            orders_url(customer.id),
            {"product_id": str(uuid.uuid4()), "quantity": 1},
            format="json",
        )
        assert response.status_code == 404

    def test_zero_quantity_returns_400(self, customer, make_product, buy):
        response = buy(customer, make_product(), 0)
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestOrderHistory:
    def test_list_is_paginated(self, api_client, customer, make_product, buy):
        product = make_product(stock=50)
        for _ in range(3):
            buy(customer, product)

        response = api_client.get("/api/v1/orders/", {"page_size": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert len(data["results"]) == 2
        assert data["next"] is not None
        assert data["results"][0]["customer_name"] == customer.name

    def test_filter_by_customer(
        self, api_client, customer, other_customer, make_product, buy
    ):
        product = make_product(stock=10)
        buy(customer, product)
        buy(other_customer, product)

        response = api_client.get("/api/v1/orders/", {"customer": str(other_customer.id)})

        results = response.json()["results"]
        assert len(results) == 1
        assert results[0]["customer_id"] == str(other_customer.id)

    def test_filter_by_source_and_total(
        self, api_client, customer, make_product, buy, add_to_cart
    ):
        cheap = make_product(price_cents=100, stock=10)
        pricey = make_product(price_cents=10_000, stock=10)
        buy(customer, cheap)
        buy(customer, pricey)
        add_to_cart(customer, cheap, 1)
        api_client.post(checkout_url(customer.id))

        direct = api_client.get("/api/v1/orders/", {"source": "direct"}).json()
        expensive = api_client.get("/api/v1/orders/", {"min_total": 5000}).json()

        assert direct["count"] == 2
        assert expensive["count"] == 1
        assert expensive["results"][0]["total_cents"] == 10_000

    def test_retrieve(self, api_client, customer, make_product, buy):
        order_id = buy(customer, make_product()).json()["id"]

        response = api_client.get(f"/api/v1/orders/{order_id}/")

        assert response.status_code == 200
        assert response.json()["id"] == order_id
        assert len(response.json()["lines"]) == 1

    def test_retrieve_unknown_returns_404(self, api_client):
        response = api_client.get(f"/api/v1/orders/{uuid.uuid4()}/")
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"
