"""
Record store interfaces used by the fulfillment pipeline.

The pipeline only talks to these abstractions so tests can swap in an
in-memory store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

from fulfillment.domain import (
    ComplementaryOrderSpec,
    EventDetail,
    OrderDetail,
    TicketTypeRef,
    TicketTypeSpec,
)

T = TypeVar("T")


class TransactionScope(ABC):
    """
    Writes available inside one store transaction.
    """

    @abstractmethod
    def create_order_with_ticket(self, spec: ComplementaryOrderSpec) -> str:
        """
        Create one completed zero-value order owning exactly one ticket.
        Returns the order id.
        """

    @abstractmethod
    def increment_quantity_sold(self, ticket_type_id: str, delta: int) -> None:
        """
        Add ``delta`` to the ticket type's quantity_sold.
        """


class TicketingStore(ABC):
    """
    Transactional access to events, ticket types, and orders.
    """

    @abstractmethod
    def find_event(self, event_id: str) -> EventDetail | None:
        """
        Return the event, or None when the id does not resolve.
        """

    @abstractmethod
    def find_ticket_type_by_name(self, event_id: str, name: str) -> TicketTypeRef | None:
        """
        Return an existing ticket type with this name under the event.
        """

    @abstractmethod
    def create_ticket_type(self, spec: TicketTypeSpec) -> TicketTypeRef:
        """
        Durably create one ticket type. Raises ConflictError on a duplicate name.
        """

    @abstractmethod
    def run_transaction(
        self,
        fn: Callable[[TransactionScope], T],
        *,
        max_wait_seconds: float,
        timeout_seconds: float,
    ) -> T:
        """
        Run ``fn`` in one transaction; commit on return, roll back on any error.
        """

    @abstractmethod
    def find_order_detail(self, order_id: str) -> OrderDetail | None:
        """
        Re-read a committed order with its event, tickets, and ticket types.
        """
