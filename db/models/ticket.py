"""
db/models/ticket.py

Ticket model: the unit of access owned by one order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.order import Order
    from db.models.ticket_type import TicketType


class TicketStatus:
    AVAILABLE = "AVAILABLE"
    USED = "USED"
    CANCELLED = "CANCELLED"


class TicketKind:
    PAID = "PAID"
    FREE = "FREE"
    COMPLEMENTARY = "COMPLEMENTARY"


class Ticket(Base, TimestampMixin):
    __tablename__ = "tickets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    event_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("events.id", ondelete="RESTRICT"),
        nullable=False,
    )
    ticket_type_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("ticket_types.id", ondelete="RESTRICT"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=TicketStatus.AVAILABLE)
    tickets_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TicketKind.PAID,
        comment="PAID, FREE, COMPLEMENTARY",
    )
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    fees: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    # ── Relationships ──────────────────────────────────────────────────────────

    order: Mapped["Order"] = relationship("Order", back_populates="tickets")
    ticket_type: Mapped["TicketType"] = relationship("TicketType", back_populates="tickets")

    __table_args__ = (
        Index("ix_tickets_order_id", "order_id"),
        Index("ix_tickets_ticket_type_id", "ticket_type_id"),
    )

    def __repr__(self) -> str:
        return f"<Ticket id={self.id} order_id={self.order_id} status={self.status}>"
