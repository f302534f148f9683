"""
Create complimentary tickets for every recipient in a CSV and e-mail them.

Usage:
    bulk-comp-tickets <event_id> <csv_path> [--json]

Exit status is 1 for bad input, an unknown event, or an existing
complimentary ticket type. A run that finishes is exit 0 even when some
order or e-mail batches failed; the summary lists them.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from fulfillment.config import (
    FulfillmentSettings,
    ResendSettings,
    get_fulfillment_settings,
    get_resend_settings,
)
from fulfillment.delivery import ResendBatchClient
from fulfillment.errors import FatalInputError, FulfillmentError
from fulfillment.logging_utils import configure_logging
from fulfillment.repositories import SQLAlchemyTicketingStore
from fulfillment.schemas import FulfillmentSummaryResponse
from fulfillment.services import ComplementaryTicketPipeline, format_summary, load_recipient_csv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bulk-create complimentary tickets for an event and e-mail each recipient.",
        epilog="Example: bulk-comp-tickets ABC123XYZ recipients.csv",
    )
    parser.add_argument("event_id", help="Event identifier to issue tickets for.")
    parser.add_argument(
        "csv_path",
        help="CSV with header columns email, firstName, lastName (extra columns ignored).",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the summary as JSON instead of the console report.",
    )
    return parser


def build_pipeline(
    settings: FulfillmentSettings,
    resend_settings: ResendSettings,
) -> ComplementaryTicketPipeline:
    """
    Wire the production store and delivery client.
    """

    from db.session import build_session_factory, create_db_engine

    engine = create_db_engine(pool_timeout=settings.transaction_max_wait_seconds)
    session_factory = build_session_factory(engine)
    return ComplementaryTicketPipeline(
        store=SQLAlchemyTicketingStore(session_factory),
        delivery=ResendBatchClient(settings=resend_settings),
        settings=settings,
    )


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    settings = get_fulfillment_settings()
    resend_settings = get_resend_settings()

    logger.info("Starting bulk complimentary ticket creation event_id=%s csv=%s", args.event_id, args.csv_path)

    try:
        records = load_recipient_csv(args.csv_path)
        if not resend_settings.api_key:
            raise FatalInputError("RESEND_API_KEY is not set; refusing to create orders that cannot be e-mailed.")

        pipeline = build_pipeline(settings, resend_settings)
        summary = pipeline.run_records(event_id=args.event_id, records=records)
    except FulfillmentError as exc:
        logger.error("Error: %s", exc)
        return 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("Fatal error: %s", exc)
        return 1

    if args.as_json:
        print(json.dumps(FulfillmentSummaryResponse.from_summary(summary).model_dump(), indent=2))
    else:
        print(format_summary(summary, display_limit=settings.failed_display_limit))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
