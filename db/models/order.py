"""
db/models/order.py

Order model. Complimentary orders are guest orders with all money fields at 0
and no payment or billing details.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.event import Event
    from db.models.ticket import Ticket


class OrderStatus:
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("events.id", ondelete="RESTRICT"),
        nullable=False,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="Null for guest orders",
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=OrderStatus.PENDING)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    fees: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    stripe_payment_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    card_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)

    # ── Relationships ──────────────────────────────────────────────────────────

    event: Mapped["Event"] = relationship("Event", back_populates="orders")
    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_orders_event_id", "event_id"),
        Index("ix_orders_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} email={self.email!r} status={self.status}>"
