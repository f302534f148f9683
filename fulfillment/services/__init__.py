"""
Pipeline stages and the orchestrator that runs them.
"""

from fulfillment.services.deduplicator import deduplicate_recipients
from fulfillment.services.email_batch_sender import EmailBatchSender
from fulfillment.services.email_renderer import EmailRenderer
from fulfillment.services.fulfillment_pipeline import ComplementaryTicketPipeline
from fulfillment.services.order_batch_writer import OrderBatchWriter
from fulfillment.services.recipient_loader import REQUIRED_CSV_COLUMNS, load_recipient_csv
from fulfillment.services.summary_reporter import build_summary, format_summary
from fulfillment.services.ticket_type_provisioner import TicketTypeProvisioner

__all__ = [
    "ComplementaryTicketPipeline",
    "EmailBatchSender",
    "EmailRenderer",
    "OrderBatchWriter",
    "REQUIRED_CSV_COLUMNS",
    "TicketTypeProvisioner",
    "build_summary",
    "deduplicate_recipients",
    "format_summary",
    "load_recipient_csv",
]
