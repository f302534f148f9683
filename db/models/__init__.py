"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.event import Event
from db.models.order import Order, OrderStatus
from db.models.ticket import Ticket, TicketKind, TicketStatus
from db.models.ticket_type import TicketingFees, TicketType, TicketTypeKind

__all__ = [
    "Event",
    "Order",
    "OrderStatus",
    "Ticket",
    "TicketKind",
    "TicketStatus",
    "TicketType",
    "TicketTypeKind",
    "TicketingFees",
]
