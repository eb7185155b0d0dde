"""Unit tests for CartDjangoRepository."""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from modules.carts.constants import CartStatus
from modules.carts.events import CartAbandoned
from modules.carts.models import Cart, CartLine
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.core.models import OutboxEvent

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CartDjangoRepository()


class TestCartRows:
    def test_create_and_list_active(self, repo, customer):
        cart = repo.create_active(customer.id)
        assert cart.status == CartStatus.ACTIVE
        assert repo.list_active(customer.id) == [cart]

    def test_list_active_ignores_closed_carts(self, repo, customer):
        Cart.objects.create(customer=customer, status=CartStatus.CHECKED_OUT)
        assert repo.list_active(customer.id) == []

    def test_get_by_id_malformed_returns_none(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_get_for_update(self, repo, customer):
        cart = repo.create_active(customer.id)
        assert repo.get_for_update(cart.id) == cart
        assert repo.get_for_update(uuid.uuid4()) is None

    def test_save_records_domain_events(self, repo, customer):
        cart = repo.create_active(customer.id)
        cart.status = CartStatus.ABANDONED
        cart.add_domain_event(CartAbandoned(aggregate_id=cart.id))
        repo.save(cart)

        cart.refresh_from_db()
        assert cart.status == CartStatus.ABANDONED
        row = OutboxEvent.objects.get(aggregate_id=str(cart.id))
        assert row.topic == "carts"
        assert row.event_type == "CartAbandoned"

    def test_list_stale_for_update(self, repo, customer, other_customer):
        stale = repo.create_active(customer.id)
        fresh = repo.create_active(other_customer.id)
        Cart.objects.filter(id=stale.id).update(
            updated_at=timezone.now() - timedelta(days=2)
        )

        result = repo.list_stale_for_update(timezone.now() - timedelta(days=1))

        assert result == [stale]
        assert fresh not in result


class TestLines:
    def test_insert_then_increment_keeps_price(self, repo, customer, make_product):
        cart = repo.create_active(customer.id)
        product = make_product(price_cents=1000)

        line = repo.insert_line(cart.id, product.id, quantity=2, unit_price_cents=1000)
        line = repo.increment_line(line, 3)

        assert line.quantity == 5
        assert line.unit_price_cents == 1000
        assert repo.get_line(cart.id, product.id).quantity == 5

    def test_lines_are_ordered_by_product_name(self, repo, customer, make_product):
        cart = repo.create_active(customer.id)
        zebra = make_product(name="Zebra Socks")
        apple = make_product(name="Apple Hat")
        repo.insert_line(cart.id, zebra.id, quantity=1, unit_price_cents=1)
        repo.insert_line(cart.id, apple.id, quantity=1, unit_price_cents=1)

        names = [line.product.name for line in repo.lines(cart.id)]
        assert names == ["Apple Hat", "Zebra Socks"]

    def test_delete_line_reports_whether_removed(self, repo, customer, make_product):
        cart = repo.create_active(customer.id)
        product = make_product()
        repo.insert_line(cart.id, product.id, quantity=1, unit_price_cents=1)

        assert repo.delete_line(cart.id, product.id) is True
        assert repo.delete_line(cart.id, product.id) is False
        assert CartLine.objects.count() == 0

    def test_reserved_quantity_counts_other_active_carts(
        self, repo, customer, other_customer, make_product
    ):
        product = make_product()
        mine = repo.create_active(customer.id)
        theirs = repo.create_active(other_customer.id)
        closed = Cart.objects.create(customer=other_customer, status=CartStatus.CHECKED_OUT)
        repo.insert_line(mine.id, product.id, quantity=2, unit_price_cents=1)
        repo.insert_line(theirs.id, product.id, quantity=3, unit_price_cents=1)
        repo.insert_line(closed.id, product.id, quantity=7, unit_price_cents=1)

        assert repo.reserved_quantity(product.id, exclude_cart_id=mine.id) == 3
        assert repo.reserved_quantity(product.id, exclude_cart_id=theirs.id) == 2

    def test_reserved_quantity_zero_when_unheld(self, repo, customer, make_product):
        cart = repo.create_active(customer.id)
        assert repo.reserved_quantity(make_product().id, exclude_cart_id=cart.id) == 0
