"""
fulfillment/services/email_batch_sender.py

Sends rendered e-mails in provider-sized batches with a pause between them.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from fulfillment.delivery.base import EmailDeliveryService
from fulfillment.domain import EmailPayload, EmailSendResult
from fulfillment.errors import BatchSendError
from fulfillment.services.batching import chunked

logger = logging.getLogger(__name__)


class EmailBatchSender:
    """
    A batch is all-or-nothing from our point of view: an error result or an
    exception marks every address in it failed. Nothing is resent.
    """

    def __init__(
        self,
        *,
        delivery: EmailDeliveryService,
        batch_size: int = 100,
        inter_batch_delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        ceiling = getattr(delivery, "max_batch_size", batch_size)
        self._delivery = delivery
        self._batch_size = max(1, min(batch_size, ceiling))
        self._delay_seconds = max(0.0, inter_batch_delay_seconds)
        self._sleep = sleep

    def send_all(self, payloads: Sequence[EmailPayload]) -> EmailSendResult:
        batches = chunked(payloads, self._batch_size)
        sent = 0
        failed: list[str] = []
        batches_failed = 0

        for index, batch in enumerate(batches, start=1):
            logger.info("E-mail batch %d/%d: sending %d e-mails", index, len(batches), len(batch))
            try:
                self._send_batch(index=index, batch=batch)
            except BatchSendError as exc:
                batches_failed += 1
                failed.extend(exc.recipients)
                logger.error(
                    "E-mail batch %d/%d failed error=%s recipients=%s",
                    index,
                    len(batches),
                    exc.reason,
                    ", ".join(exc.recipients),
                )
            else:
                sent += len(batch)
                logger.info("E-mail batch %d/%d sent", index, len(batches))

            if index < len(batches) and self._delay_seconds > 0:
                self._sleep(self._delay_seconds)

        return EmailSendResult(
            sent=sent,
            failed_addresses=failed,
            batches_total=len(batches),
            batches_failed=batches_failed,
        )

    def _send_batch(self, *, index: int, batch: list[EmailPayload]) -> None:
        recipients = [payload.to for payload in batch]
        try:
            result = self._delivery.send_batch(batch)
        except Exception as exc:  # noqa: BLE001
            raise BatchSendError(batch_index=index, recipients=recipients, reason=str(exc)) from exc
        if not result.ok:
            raise BatchSendError(
                batch_index=index,
                recipients=recipients,
                reason=result.error or "delivery service reported an error",
            )
