"""
fulfillment/domain/fulfillment.py

Value types passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CandidateRecord:
    """
    One decoded CSV row; not yet checked for uniqueness.
    """

    email: str
    first_name: str
    last_name: str
    row_number: int = 0


@dataclass(frozen=True)
class Recipient:
    """
    One unique (case-insensitive) e-mail address with its first-seen names.
    """

    email: str
    first_name: str
    last_name: str

    @property
    def key(self) -> str:
        return normalize_email_key(self.email)


def normalize_email_key(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class DedupResult:
    recipients: list[Recipient]
    duplicates_removed: int
    duplicate_emails: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EventDetail:
    """
    Read-only view of the target event.
    """

    id: str
    name: str
    start_date: datetime
    end_date: datetime | None = None
    image_url: str | None = None
    address: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class TicketTypeRef:
    id: str
    name: str


@dataclass(frozen=True)
class TicketTypeSpec:
    """
    Attributes of the complimentary ticket type to create.
    """

    event_id: str
    name: str
    quantity: int
    sale_start_date: datetime
    sale_end_date: datetime
    description: str
    price: Decimal = Decimal("0")
    max_purchase_per_user: int = 1


@dataclass(frozen=True)
class ComplementaryOrderSpec:
    """
    One order + ticket pair to create inside a batch transaction.
    """

    order_id: str
    ticket_id: str
    ticket_type_id: str
    event_id: str
    email: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class TicketTypeDetail:
    id: str
    name: str
    description: str | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class TicketDetail:
    id: str
    total: Decimal | None = None
    subtotal: Decimal | None = None
    fees: Decimal | None = None
    ticket_type: TicketTypeDetail | None = None


@dataclass(frozen=True)
class OrderDetail:
    """
    An order re-read after commit with everything the e-mail template needs.
    """

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    event: EventDetail
    tickets: list[TicketDetail] = field(default_factory=list)
    total: Decimal | None = None
    subtotal: Decimal | None = None
    fees: Decimal | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class EmailPayload:
    from_address: str
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class OrderWriteResult:
    created_order_ids: list[str]
    failed_recipients: list[Recipient] = field(default_factory=list)
    batches_total: int = 0
    batches_failed: int = 0


@dataclass(frozen=True)
class EmailSendResult:
    sent: int
    failed_addresses: list[str] = field(default_factory=list)
    batches_total: int = 0
    batches_failed: int = 0


@dataclass(frozen=True)
class FulfillmentSummary:
    """
    End-of-run report; the single source of truth for what happened.
    """

    total_recipients: int
    duplicates_removed: int
    unique_recipients: int
    orders_created: int
    orders_failed: int
    emails_rendered: int
    emails_sent: int
    emails_failed: int
    failed_emails: list[str] = field(default_factory=list)
    failed_order_emails: list[str] = field(default_factory=list)

    @property
    def orders_created_pct(self) -> int:
        return _percent(self.orders_created, self.unique_recipients)

    @property
    def emails_sent_pct(self) -> int:
        return _percent(self.emails_sent, self.orders_created)


def _percent(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    # Half-up rounding; round() would send 12.5 to 12.
    return int(numerator * 100 / denominator + 0.5)
