"""
fulfillment/services/ticket_type_provisioner.py

Validates the target event and creates the run's complimentary ticket type.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fulfillment.domain import EventDetail, TicketTypeRef, TicketTypeSpec
from fulfillment.errors import ConflictError, NotFoundError
from fulfillment.repositories.base import TicketingStore

logger = logging.getLogger(__name__)

SALE_WINDOW_LEAD = timedelta(days=365)


class TicketTypeProvisioner:
    """
    Creates exactly one complimentary ticket type per run.

    An existing ticket type with the reserved name is never reused or
    resized; the run stops with ConflictError instead.
    """

    def __init__(self, *, store: TicketingStore, ticket_type_name: str) -> None:
        self._store = store
        self._ticket_type_name = ticket_type_name

    def load_event(self, event_id: str) -> EventDetail:
        event = self._store.find_event(event_id)
        if event is None:
            raise NotFoundError(f'Event with ID "{event_id}" not found')
        return event

    def provision(self, *, event: EventDetail, quantity: int) -> TicketTypeRef:
        existing = self._store.find_ticket_type_by_name(event.id, self._ticket_type_name)
        if existing is not None:
            raise ConflictError(
                "A complementary ticket type already exists for this event "
                f"(existing ticket type ID: {existing.id}). Delete it or use a different event.",
                existing_id=existing.id,
            )

        spec = build_ticket_type_spec(
            event=event,
            name=self._ticket_type_name,
            quantity=quantity,
            now=datetime.now(tz=timezone.utc),
        )
        ticket_type = self._store.create_ticket_type(spec)
        logger.info(
            "Ticket type created id=%s name=%r event_id=%s quantity=%d",
            ticket_type.id,
            ticket_type.name,
            event.id,
            quantity,
        )
        return ticket_type


def build_ticket_type_spec(
    *,
    event: EventDetail,
    name: str,
    quantity: int,
    now: datetime,
) -> TicketTypeSpec:
    """
    Sale window: one year before the event starts until it ends
    (or starts, when there is no end date).
    """

    return TicketTypeSpec(
        event_id=event.id,
        name=name,
        quantity=quantity,
        sale_start_date=event.start_date - SALE_WINDOW_LEAD,
        sale_end_date=event.end_date or event.start_date,
        description=f"Complimentary tickets - Bulk created {now.isoformat()}",
        max_purchase_per_user=1,
    )
