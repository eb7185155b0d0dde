"""Asynchronous tasks of the core module."""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, Type
from uuid import UUID

import structlog
from celery import shared_task
from django.db import transaction

from modules.core.models import EventStatus, OutboxEvent
from shared.domain.events import DomainEvent, event_type_for
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

RELAY_BATCH_SIZE = 100


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Hand pending outbox rows to the in-process event bus.

    Each row is relayed in its own transaction so one failing handler
    does not hold back the rest of the batch.
    """
    pending_ids = list(
        OutboxEvent.objects.filter(status=EventStatus.PENDING)
        .order_by("created_at")
        .values_list("id", flat=True)[:batch_size]
    )
    published = failed = 0
    for event_id in pending_ids:
        with transaction.atomic():
            row = (
                OutboxEvent.objects.select_for_update()
                .filter(id=event_id, status=EventStatus.PENDING)
                .first()
            )
            if row is None:
                continue
            log = logger.bind(outbox_id=str(row.id), event_type=row.event_type)
            event_cls = event_type_for(row.event_type)
            if event_cls is None:
                row.mark_as_failed(f"Unknown event type {row.event_type}.")
                log.warning("outbox.unknown_event_type")
                failed += 1
                continue
            try:
                event_bus.publish(_rebuild_event(event_cls, row))
            except Exception as exc:
                row.mark_as_failed(str(exc))
                log.exception("outbox.relay_failed")
                failed += 1
                continue
            row.mark_as_published()
            published += 1

    logger.info("outbox.relay_completed", published=published, failed=failed)
    return {"published": published, "failed": failed}


def _rebuild_event(event_cls: Type[DomainEvent], row: OutboxEvent) -> DomainEvent:
    """Recreate an event from its outbox row.

    Identity fields are restored as UUIDs; other payload fields are passed
    through as stored JSON values.
    """
    kwargs: Dict[str, Any] = {
        "aggregate_id": UUID(row.aggregate_id),
        "event_id": UUID(row.payload["event_id"]),
    }
    for f in fields(event_cls):
        if not f.init or f.name in kwargs or f.name == "occurred_on":
            continue
        if f.name in row.payload:
            kwargs[f.name] = row.payload[f.name]
    return event_cls(**kwargs)
