"""
db/models/event.py

Event model: the listing complimentary tickets are issued against.
Read-only to the fulfillment pipeline.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.order import Order
    from db.models.ticket_type import TicketType


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Opaque public identifier",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    ticket_types: Mapped[list["TicketType"]] = relationship(
        "TicketType",
        back_populates="event",
    )
    orders: Mapped[list["Order"]] = relationship(
        "Order",
        back_populates="event",
    )

    __table_args__ = (Index("ix_events_start_date", "start_date"),)

    def __repr__(self) -> str:
        return f"<Event id={self.id} name={self.name!r}>"
