"""
Fulfillment pipeline exceptions.

FatalInputError, NotFoundError and ConflictError abort a run before any
write. BatchWriteError, RenderError and BatchSendError are raised and caught
inside their stage so one failing batch or item never stops the run.
"""

from __future__ import annotations

from collections.abc import Sequence


class FulfillmentError(Exception):
    """Base exception for the complimentary ticket pipeline."""


class FatalInputError(FulfillmentError):
    """Raised for bad arguments, unreadable/empty CSV files, or missing columns."""


class NotFoundError(FulfillmentError):
    """Raised when the target event does not exist."""


class ConflictError(FulfillmentError):
    """Raised when a complimentary ticket type already exists for the event."""

    def __init__(self, message: str, *, existing_id: str | None = None) -> None:
        super().__init__(message)
        self.existing_id = existing_id


class TransactionTimeoutError(FulfillmentError):
    """Raised when a transaction exceeds its acquire or total time budget."""


class CapacityExceededError(FulfillmentError):
    """Raised when an increment would push quantity_sold past the ticket type's quantity."""


class BatchWriteError(FulfillmentError):
    """One order batch failed and was rolled back."""

    def __init__(self, *, batch_index: int, emails: Sequence[str], cause: BaseException) -> None:
        super().__init__(f"Order batch {batch_index} failed: {cause}")
        self.batch_index = batch_index
        self.emails = tuple(emails)
        self.cause = cause


class RenderError(FulfillmentError):
    """One order's e-mail could not be rendered."""

    def __init__(self, *, order_id: str, cause: BaseException) -> None:
        super().__init__(f"Failed to render e-mail for order {order_id}: {cause}")
        self.order_id = order_id
        self.cause = cause


class BatchSendError(FulfillmentError):
    """One e-mail batch was rejected by, or never reached, the delivery service."""

    def __init__(self, *, batch_index: int, recipients: Sequence[str], reason: str) -> None:
        super().__init__(f"E-mail batch {batch_index} failed: {reason}")
        self.batch_index = batch_index
        self.recipients = tuple(recipients)
        self.reason = reason
