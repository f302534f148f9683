"""
fulfillment/delivery/base.py

E-mail delivery abstraction: one call per batch, batch-level outcome only.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from fulfillment.domain import EmailPayload


class DeliveryRequestError(RuntimeError):
    """
    Raised when a batch request cannot reach the delivery service.
    """


@dataclass(frozen=True)
class BatchSendResult:
    """
    Outcome of one batch call. Per-message ids, if any, are informational.
    """

    ok: bool
    error: str | None = None
    message_ids: tuple[str, ...] = ()


class EmailDeliveryService(ABC):
    """
    Batch e-mail sender interface.
    """

    max_batch_size: int

    @abstractmethod
    def send_batch(self, messages: Sequence[EmailPayload]) -> BatchSendResult:
        """
        Submit all messages in one call.
        """
