"""
fulfillment/services/fulfillment_pipeline.py

Runs the complimentary ticket stages in order for one event and one CSV:

    load → dedup → provision ticket type → write orders → render → send → summarize

Input, event and ticket-type problems raise before anything is written.
From the order stage on, failures are contained per batch or per item and
only show up in the returned summary.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from fulfillment.config import FulfillmentSettings
from fulfillment.delivery.base import EmailDeliveryService
from fulfillment.domain import CandidateRecord, FulfillmentSummary
from fulfillment.errors import FatalInputError
from fulfillment.logging_utils import log_event
from fulfillment.repositories.base import TicketingStore
from fulfillment.repositories.ticketing_repository import new_record_id
from fulfillment.services.batching import batch_count
from fulfillment.services.deduplicator import deduplicate_recipients
from fulfillment.services.email_batch_sender import EmailBatchSender
from fulfillment.services.email_renderer import EmailRenderer
from fulfillment.services.order_batch_writer import OrderBatchWriter
from fulfillment.services.recipient_loader import load_recipient_csv
from fulfillment.services.summary_reporter import build_summary
from fulfillment.services.ticket_type_provisioner import TicketTypeProvisioner

logger = logging.getLogger(__name__)


class ComplementaryTicketPipeline:
    """
    Wires the stages together around an injected store and delivery service.
    """

    def __init__(
        self,
        *,
        store: TicketingStore,
        delivery: EmailDeliveryService,
        settings: FulfillmentSettings,
        sleep: Callable[[float], None] = time.sleep,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._settings = settings
        self._provisioner = TicketTypeProvisioner(
            store=store,
            ticket_type_name=settings.ticket_type_name,
        )
        self._writer = OrderBatchWriter(
            store=store,
            batch_size=settings.order_batch_size,
            max_wait_seconds=settings.transaction_max_wait_seconds,
            timeout_seconds=settings.transaction_timeout_seconds,
            id_factory=id_factory,
        )
        self._renderer = EmailRenderer(
            store=store,
            email_from=settings.email_from,
            base_url=settings.base_url,
            progress_every=settings.render_progress_every,
        )
        self._sender = EmailBatchSender(
            delivery=delivery,
            batch_size=settings.email_batch_size,
            inter_batch_delay_seconds=settings.inter_batch_delay_seconds,
            sleep=sleep,
        )

    def run(self, *, event_id: str, csv_path: str | Path) -> FulfillmentSummary:
        records = load_recipient_csv(csv_path)
        return self.run_records(event_id=event_id, records=records)

    def run_records(self, *, event_id: str, records: Sequence[CandidateRecord]) -> FulfillmentSummary:
        started = time.monotonic()

        dedup = deduplicate_recipients(records)
        log_event(
            logger,
            logging.INFO,
            "recipients_deduplicated",
            total_rows=len(records),
            unique=len(dedup.recipients),
            duplicates_removed=dedup.duplicates_removed,
        )
        if not dedup.recipients:
            raise FatalInputError("No recipients to process.")

        event = self._provisioner.load_event(event_id)
        logger.info("Event validated id=%s name=%r", event.id, event.name)
        ticket_type = self._provisioner.provision(event=event, quantity=len(dedup.recipients))

        logger.info(
            "Creating %d orders (%d batches of %d)",
            len(dedup.recipients),
            batch_count(len(dedup.recipients), self._settings.order_batch_size),
            self._settings.order_batch_size,
        )

        orders = self._writer.write(
            recipients=dedup.recipients,
            ticket_type=ticket_type,
            event_id=event.id,
        )
        log_event(
            logger,
            logging.INFO,
            "orders_written",
            created=len(orders.created_order_ids),
            requested=len(dedup.recipients),
            batches=orders.batches_total,
            failed_batches=orders.batches_failed,
        )

        payloads = self._renderer.render_all(orders.created_order_ids)
        log_event(
            logger,
            logging.INFO,
            "emails_rendered",
            rendered=len(payloads),
            orders=len(orders.created_order_ids),
        )

        logger.info(
            "Sending %d e-mails (%d batches of up to %d)",
            len(payloads),
            batch_count(len(payloads), self._settings.email_batch_size),
            self._settings.email_batch_size,
        )
        emails = self._sender.send_all(payloads)
        log_event(
            logger,
            logging.INFO,
            "emails_sent",
            sent=emails.sent,
            failed=len(emails.failed_addresses),
            batches=emails.batches_total,
            failed_batches=emails.batches_failed,
            took_ms=int((time.monotonic() - started) * 1000),
        )

        return build_summary(
            total_rows=len(records),
            dedup=dedup,
            orders=orders,
            emails_rendered=len(payloads),
            emails=emails,
        )
