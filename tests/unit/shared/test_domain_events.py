"""Unit tests for domain event primitives and the in-memory bus."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.carts.events import CartAbandoned, CartCheckedOut
from modules.carts.models import Cart
from modules.orders.events import OrderPlaced
from shared.domain.events import event_type_for
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


def test_cart_registers_and_clears_domain_events():
    cart = Cart(customer_id=uuid4())

    assert cart.domain_events == []

    event = CartCheckedOut(aggregate_id=cart.id)
    cart.add_domain_event(event)

    assert cart.domain_events == [event]
    assert event.event_name == "CartCheckedOut"

    cart.clear_domain_events()
    assert cart.domain_events == []


def test_event_classes_register_by_name():
    assert event_type_for("OrderPlaced") is OrderPlaced
    assert event_type_for("CartAbandoned") is CartAbandoned
    assert event_type_for("Nope") is None


def test_events_are_immutable():
    event = OrderPlaced(aggregate_id=uuid4(), total_cents=100)
    with pytest.raises(AttributeError):
        event.total_cents = 200  # type: ignore[misc]


class _Recorder:
    def __init__(self) -> None:
        self.seen = []

    def handle(self, event) -> None:
        self.seen.append(event)


class TestInMemoryEventBus:
    def test_publish_reaches_subscribed_handlers_only(self):
        bus = InMemoryEventBus()
        placed, abandoned = _Recorder(), _Recorder()
        bus.subscribe(OrderPlaced, placed)
        bus.subscribe(CartAbandoned, abandoned)

        event = OrderPlaced(aggregate_id=uuid4())
        bus.publish(event)

        assert placed.seen == [event]
        assert abandoned.seen == []

    def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = _Recorder()
        bus.subscribe(OrderPlaced, handler)
        bus.subscribe(OrderPlaced, handler)

        assert bus.handlers_for(OrderPlaced) == [handler]

    def test_handler_errors_propagate(self):
        class _Boom:
            def handle(self, event) -> None:
                raise ValueError("boom")

        bus = InMemoryEventBus()
        bus.subscribe(OrderPlaced, _Boom())
        with pytest.raises(ValueError):
            bus.publish(OrderPlaced(aggregate_id=uuid4()))


def test_app_handlers_are_subscribed_on_startup():
    from shared.infrastructure.bus import event_bus

    assert event_bus.handlers_for(OrderPlaced)
    assert event_bus.handlers_for(CartCheckedOut)
    assert event_bus.handlers_for(CartAbandoned)
