"""
fulfillment/repositories/ticketing_repository.py

SQLAlchemy-backed record store for events, ticket types, and orders.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable
from decimal import Decimal
from typing import TypeVar

from sqlalchemy import select, text, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from db.models import Event, Order, OrderStatus, Ticket, TicketKind, TicketStatus, TicketType, TicketTypeKind, TicketingFees
from fulfillment.domain import (
    ComplementaryOrderSpec,
    EventDetail,
    OrderDetail,
    TicketDetail,
    TicketTypeDetail,
    TicketTypeRef,
    TicketTypeSpec,
)
from fulfillment.errors import CapacityExceededError, ConflictError, TransactionTimeoutError
from fulfillment.repositories.base import TicketingStore, TransactionScope

T = TypeVar("T")

_TICKET_TYPE_NAME_CONSTRAINT = "uq_ticket_types_event_id_name"
_ZERO = Decimal("0")


def new_record_id() -> str:
    return uuid.uuid4().hex


class SQLAlchemyTransactionScope(TransactionScope):
    """
    Order writes bound to one open session transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create_order_with_ticket(self, spec: ComplementaryOrderSpec) -> str:
        order = Order(
            id=spec.order_id,
            event_id=spec.event_id,
            status=OrderStatus.COMPLETED,
            first_name=spec.first_name,
            last_name=spec.last_name,
            email=spec.email,
            total=_ZERO,
            subtotal=_ZERO,
            fees=_ZERO,
        )
        order.tickets.append(
            Ticket(
                id=spec.ticket_id,
                event_id=spec.event_id,
                ticket_type_id=spec.ticket_type_id,
                status=TicketStatus.AVAILABLE,
                tickets_type=TicketKind.COMPLEMENTARY,
                first_name=spec.first_name,
                last_name=spec.last_name,
                email=spec.email,
                total=_ZERO,
                subtotal=_ZERO,
                fees=_ZERO,
            )
        )
        self._session.add(order)
        self._session.flush()
        return order.id

    def increment_quantity_sold(self, ticket_type_id: str, delta: int) -> None:
        stmt = (
            update(TicketType)
            .where(TicketType.id == ticket_type_id)
            .where(TicketType.quantity_sold + delta <= TicketType.quantity)
            .values(quantity_sold=TicketType.quantity_sold + delta)
        )
        result = self._session.execute(stmt)
        if result.rowcount != 1:
            raise CapacityExceededError(
                f"Cannot add {delta} to quantity_sold of ticket type {ticket_type_id}."
            )


class SQLAlchemyTicketingStore(TicketingStore):
    """
    Record store over a PostgreSQL session factory.

    Every public call uses its own session so reads after a committed batch
    always see that batch.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_event(self, event_id: str) -> EventDetail | None:
        with self._session_factory() as session:
            event = session.get(Event, event_id)
            if event is None:
                return None
            return _to_event_detail(event)

    def find_ticket_type_by_name(self, event_id: str, name: str) -> TicketTypeRef | None:
        stmt = (
            select(TicketType)
            .where(TicketType.event_id == event_id)
            .where(TicketType.name == name)
            .limit(1)
        )
        with self._session_factory() as session:
            ticket_type = session.execute(stmt).scalars().first()
            if ticket_type is None:
                return None
            return TicketTypeRef(id=ticket_type.id, name=ticket_type.name)

    def create_ticket_type(self, spec: TicketTypeSpec) -> TicketTypeRef:
        ticket_type = TicketType(
            id=new_record_id(),
            event_id=spec.event_id,
            name=spec.name,
            description=spec.description,
            ticket_type=TicketTypeKind.FREE,
            price=spec.price,
            quantity=spec.quantity,
            quantity_sold=0,
            max_purchase_per_user=spec.max_purchase_per_user,
            sale_start_date=spec.sale_start_date,
            sale_end_date=spec.sale_end_date,
            ticketing_fees=TicketingFees.PASS_TICKET_FEES,
        )
        with self._session_factory() as session:
            try:
                session.add(ticket_type)
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if _TICKET_TYPE_NAME_CONSTRAINT in str(exc.orig):
                    raise ConflictError(
                        f"Ticket type {spec.name!r} already exists for event {spec.event_id}."
                    ) from exc
                raise
            return TicketTypeRef(id=ticket_type.id, name=ticket_type.name)

    def run_transaction(
        self,
        fn: Callable[[TransactionScope], T],
        *,
        max_wait_seconds: float,
        timeout_seconds: float,
    ) -> T:
        """
        Run ``fn`` inside one transaction bounded by both time budgets.

        The acquire budget covers connection checkout and row-lock waits
        (lock_timeout); the total budget covers every statement
        (statement_timeout) plus a deadline check before COMMIT.
        """

        started = time.monotonic()
        with self._session_factory() as session:
            try:
                with session.begin():
                    session.connection()
                    waited = time.monotonic() - started
                    if waited > max_wait_seconds:
                        raise TransactionTimeoutError(
                            f"Waited {waited:.1f}s to start transaction (limit {max_wait_seconds:.1f}s)."
                        )
                    _apply_local_timeouts(
                        session,
                        lock_timeout_ms=int(max_wait_seconds * 1000),
                        statement_timeout_ms=int(timeout_seconds * 1000),
                    )
                    result = fn(SQLAlchemyTransactionScope(session))
                    session.flush()
                    elapsed = time.monotonic() - started
                    if elapsed > timeout_seconds:
                        raise TransactionTimeoutError(
                            f"Transaction ran {elapsed:.1f}s (limit {timeout_seconds:.1f}s)."
                        )
            except PoolTimeoutError as exc:
                raise TransactionTimeoutError(
                    f"No database connection available within {max_wait_seconds:.1f}s."
                ) from exc
        return result

    def find_order_detail(self, order_id: str) -> OrderDetail | None:
        stmt = (
            select(Order)
            .where(Order.id == order_id)
            .options(
                selectinload(Order.event),
                selectinload(Order.tickets).selectinload(Ticket.ticket_type),
            )
        )
        with self._session_factory() as session:
            order = session.execute(stmt).scalars().first()
            if order is None:
                return None
            return OrderDetail(
                id=order.id,
                email=order.email,
                first_name=order.first_name,
                last_name=order.last_name,
                event=_to_event_detail(order.event),
                tickets=[_to_ticket_detail(ticket) for ticket in order.tickets],
                total=order.total,
                subtotal=order.subtotal,
                fees=order.fees,
                created_at=order.created_at,
            )


def _apply_local_timeouts(session: Session, *, lock_timeout_ms: int, statement_timeout_ms: int) -> None:
    # SET does not accept bind parameters; values are integers we computed.
    session.execute(text(f"SET LOCAL lock_timeout = {max(1, lock_timeout_ms)}"))
    session.execute(text(f"SET LOCAL statement_timeout = {max(1, statement_timeout_ms)}"))


def _to_event_detail(event: Event) -> EventDetail:
    return EventDetail(
        id=event.id,
        name=event.name,
        start_date=event.start_date,
        end_date=event.end_date,
        image_url=event.image_url,
        address=event.address,
        description=event.description,
    )


def _to_ticket_detail(ticket: Ticket) -> TicketDetail:
    ticket_type = ticket.ticket_type
    return TicketDetail(
        id=ticket.id,
        total=ticket.total,
        subtotal=ticket.subtotal,
        fees=ticket.fees,
        ticket_type=(
            TicketTypeDetail(
                id=ticket_type.id,
                name=ticket_type.name,
                description=ticket_type.description,
                price=ticket_type.price,
            )
            if ticket_type is not None
            else None
        ),
    )
