"""Unit tests for the outbox helpers (``record_domain_events``)."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.carts.events import CartCheckedOut
from modules.carts.models import Cart
from modules.core.models import EventStatus, OutboxEvent
from modules.core.outbox import record_domain_events, serialize_event_payload

pytestmark = pytest.mark.unit


class TestSerializeEventPayload:
    def test_uuids_and_datetimes_become_strings(self):
        order_id = uuid4()
        event = CartCheckedOut(aggregate_id=uuid4(), order_id=order_id)
        payload = serialize_event_payload(event)
        assert payload["order_id"] == str(order_id)
        assert payload["event_name"] == "CartCheckedOut"
        assert isinstance(payload["occurred_on"], str)
        assert isinstance(payload["event_id"], str)


class TestRecordDomainEvents:
    def test_records_and_clears_collected_events(self, customer):
        cart = Cart.objects.create(customer=customer)
        cart.add_domain_event(CartCheckedOut(aggregate_id=cart.id))

        count = record_domain_events(cart, topic="carts")

        assert count == 1
        assert cart.domain_events == []
        row = OutboxEvent.objects.get(aggregate_id=str(cart.id))
        assert row.event_type == "CartCheckedOut"
        assert row.topic == "carts"
        assert row.status == EventStatus.PENDING

    def test_entity_without_events_records_nothing(self):
        assert record_domain_events(object(), topic="carts") == 0
        assert OutboxEvent.objects.count() == 0
