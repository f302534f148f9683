"""
fulfillment/repositories package marker.
"""

from fulfillment.repositories.base import TicketingStore, TransactionScope
from fulfillment.repositories.ticketing_repository import SQLAlchemyTicketingStore, new_record_id

__all__ = [
    "SQLAlchemyTicketingStore",
    "TicketingStore",
    "TransactionScope",
    "new_record_id",
]
