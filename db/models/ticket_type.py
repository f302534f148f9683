"""
db/models/ticket_type.py

Ticket type model: a finite-capacity pool of tickets tied to one event.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.event import Event
    from db.models.ticket import Ticket


class TicketTypeKind:
    PAID = "PAID"
    FREE = "FREE"


class TicketingFees:
    PASS_TICKET_FEES = "PASS_TICKET_FEES"
    ABSORB_TICKET_FEES = "ABSORB_TICKET_FEES"


class TicketType(Base, TimestampMixin):
    """
    quantity is the capacity; quantity_sold only ever grows, by the size of
    each committed order batch.
    """

    __tablename__ = "ticket_types"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("events.id", ondelete="RESTRICT"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    ticket_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TicketTypeKind.PAID,
        comment="PAID, FREE",
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity_sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_purchase_per_user: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    sale_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sale_end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ticketing_fees: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TicketingFees.PASS_TICKET_FEES,
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    event: Mapped["Event"] = relationship("Event", back_populates="ticket_types")
    tickets: Mapped[list["Ticket"]] = relationship("Ticket", back_populates="ticket_type")

    __table_args__ = (
        UniqueConstraint("event_id", "name"),
        CheckConstraint("quantity_sold >= 0", name="quantity_sold_non_negative"),
        CheckConstraint("quantity_sold <= quantity", name="quantity_sold_within_quantity"),
        Index("ix_ticket_types_event_id", "event_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TicketType id={self.id} name={self.name!r} "
            f"sold={self.quantity_sold}/{self.quantity}>"
        )
