"""Unit tests for the ``core.relay_outbox_events`` Celery task."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.core.outbox import serialize_event_payload
from modules.core.tasks import relay_outbox_events
from modules.orders.events import OrderPlaced
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


class _RecordingHandler:
    def __init__(self) -> None:
        self.events = []

    def handle(self, event) -> None:
        self.events.append(event)


class _FailingHandler:
    def handle(self, event) -> None:
        raise RuntimeError("downstream unavailable")


def _outbox_row(event) -> OutboxEvent:
    return OutboxEvent.objects.create(
        event_type=event.event_name,
        aggregate_id=str(event.aggregate_id),
        payload=serialize_event_payload(event),
        topic="orders",
    )


@pytest.fixture()
def isolated_handlers(monkeypatch):
    """Swap the global bus registry for an empty one during the test."""
    monkeypatch.setattr(event_bus, "_handlers", {})
    return event_bus


class TestRelayOutboxEvents:
    def test_publishes_pending_rows(self, isolated_handlers):
        handler = _RecordingHandler()
        isolated_handlers.subscribe(OrderPlaced, handler)
        event = OrderPlaced(aggregate_id=uuid4(), total_cents=700, source="cart")
        row = _outbox_row(event)

        result = relay_outbox_events()

        assert result == {"published": 1, "failed": 0}
        row.refresh_from_db()
        assert row.status == EventStatus.PUBLISHED
        assert len(handler.events) == 1
        relayed = handler.events[0]
        assert relayed.aggregate_id == event.aggregate_id
        assert relayed.event_id == event.event_id
        assert relayed.total_cents == 700
        assert relayed.source == "cart"

    def test_handler_failure_marks_row_failed(self, isolated_handlers):
        isolated_handlers.subscribe(OrderPlaced, _FailingHandler())
        row = _outbox_row(OrderPlaced(aggregate_id=uuid4()))

        result = relay_outbox_events()

        assert result == {"published": 0, "failed": 1}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED
        assert row.retry_count == 1
        assert "downstream unavailable" in row.error_message

    def test_unknown_event_type_marks_row_failed(self, isolated_handlers):
        row = OutboxEvent.objects.create(
            event_type="NoSuchEvent",
            aggregate_id=str(uuid4()),
            payload={"event_id": str(uuid4())},
            topic="orders",
        )

        result = relay_outbox_events()

        assert result == {"published": 0, "failed": 1}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED

    def test_published_rows_are_not_relayed_again(self, isolated_handlers):
        handler = _RecordingHandler()
        isolated_handlers.subscribe(OrderPlaced, handler)
        _outbox_row(OrderPlaced(aggregate_id=uuid4()))

        relay_outbox_events()
        second = relay_outbox_events()

        assert second == {"published": 0, "failed": 0}
        assert len(handler.events) == 1

    def test_respects_batch_size(self, isolated_handlers):
        for _ in range(3):
            _outbox_row(OrderPlaced(aggregate_id=uuid4()))

        result = relay_outbox_events(batch_size=2)

        assert result["published"] == 2
        assert OutboxEvent.objects.filter(status=EventStatus.PENDING).count() == 1
