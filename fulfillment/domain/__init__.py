"""
Domain value types for the fulfillment pipeline.
"""

from fulfillment.domain.fulfillment import (
    CandidateRecord,
    ComplementaryOrderSpec,
    DedupResult,
    EmailPayload,
    EmailSendResult,
    EventDetail,
    FulfillmentSummary,
    OrderDetail,
    OrderWriteResult,
    Recipient,
    TicketDetail,
    TicketTypeDetail,
    TicketTypeRef,
    TicketTypeSpec,
    normalize_email_key,
)

__all__ = [
    "CandidateRecord",
    "ComplementaryOrderSpec",
    "DedupResult",
    "EmailPayload",
    "EmailSendResult",
    "EventDetail",
    "FulfillmentSummary",
    "OrderDetail",
    "OrderWriteResult",
    "Recipient",
    "TicketDetail",
    "TicketTypeDetail",
    "TicketTypeRef",
    "TicketTypeSpec",
    "normalize_email_key",
]
