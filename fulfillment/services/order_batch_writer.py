"""
fulfillment/services/order_batch_writer.py

Creates complimentary orders in fixed-size, all-or-nothing batches.

Batches run one after another: each one increments the same ticket type's
quantity_sold, and running them serially keeps order ids in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from fulfillment.domain import ComplementaryOrderSpec, OrderWriteResult, Recipient, TicketTypeRef
from fulfillment.errors import BatchWriteError
from fulfillment.repositories.base import TicketingStore, TransactionScope
from fulfillment.repositories.ticketing_repository import new_record_id
from fulfillment.services.batching import chunked

logger = logging.getLogger(__name__)


class OrderBatchWriter:
    """
    One transaction per batch: N order+ticket pairs plus one quantity_sold
    increment of N. A failing batch is rolled back as a whole and its
    recipients reported; later batches still run.
    """

    def __init__(
        self,
        *,
        store: TicketingStore,
        batch_size: int = 50,
        max_wait_seconds: float = 10.0,
        timeout_seconds: float = 30.0,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._store = store
        self._batch_size = max(1, batch_size)
        self._max_wait_seconds = max_wait_seconds
        self._timeout_seconds = timeout_seconds
        self._id_factory = id_factory

    def write(
        self,
        *,
        recipients: Sequence[Recipient],
        ticket_type: TicketTypeRef,
        event_id: str,
    ) -> OrderWriteResult:
        batches = chunked(recipients, self._batch_size)
        created_order_ids: list[str] = []
        failed_recipients: list[Recipient] = []
        batches_failed = 0

        for index, batch in enumerate(batches, start=1):
            logger.info("Order batch %d/%d: creating %d orders", index, len(batches), len(batch))
            try:
                order_ids = self._write_batch(
                    index=index,
                    batch=batch,
                    ticket_type=ticket_type,
                    event_id=event_id,
                )
            except BatchWriteError as exc:
                batches_failed += 1
                failed_recipients.extend(batch)
                logger.error(
                    "Order batch %d/%d failed error=%s failed_recipients=%s",
                    index,
                    len(batches),
                    exc.cause,
                    ", ".join(exc.emails),
                )
                continue

            created_order_ids.extend(order_ids)
            logger.info("Order batch %d/%d complete orders=%d", index, len(batches), len(order_ids))

        if failed_recipients:
            logger.warning(
                "%d orders failed; re-run with the failed recipients to retry",
                len(failed_recipients),
            )

        return OrderWriteResult(
            created_order_ids=created_order_ids,
            failed_recipients=failed_recipients,
            batches_total=len(batches),
            batches_failed=batches_failed,
        )

    def _write_batch(
        self,
        *,
        index: int,
        batch: list[Recipient],
        ticket_type: TicketTypeRef,
        event_id: str,
    ) -> list[str]:
        def create_batch(tx: TransactionScope) -> list[str]:
            order_ids: list[str] = []
            for recipient in batch:
                spec = ComplementaryOrderSpec(
                    order_id=self._id_factory(),
                    ticket_id=self._id_factory(),
                    ticket_type_id=ticket_type.id,
                    event_id=event_id,
                    email=recipient.email,
                    first_name=recipient.first_name,
                    last_name=recipient.last_name,
                )
                order_ids.append(tx.create_order_with_ticket(spec))
            tx.increment_quantity_sold(ticket_type.id, len(batch))
            return order_ids

        try:
            return self._store.run_transaction(
                create_batch,
                max_wait_seconds=self._max_wait_seconds,
                timeout_seconds=self._timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001
            raise BatchWriteError(
                batch_index=index,
                emails=[recipient.email for recipient in batch],
                cause=exc,
            ) from exc
