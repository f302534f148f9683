"""
fulfillment/services/summary_reporter.py

Aggregates stage outcomes into the end-of-run report.
"""

from __future__ import annotations

from fulfillment.domain import DedupResult, EmailSendResult, FulfillmentSummary, OrderWriteResult

_RULE = "=" * 60


def build_summary(
    *,
    total_rows: int,
    dedup: DedupResult,
    orders: OrderWriteResult,
    emails_rendered: int,
    emails: EmailSendResult,
) -> FulfillmentSummary:
    unique = len(dedup.recipients)
    created = len(orders.created_order_ids)
    return FulfillmentSummary(
        total_recipients=total_rows,
        duplicates_removed=dedup.duplicates_removed,
        unique_recipients=unique,
        orders_created=created,
        orders_failed=unique - created,
        emails_rendered=emails_rendered,
        emails_sent=emails.sent,
        emails_failed=len(emails.failed_addresses),
        failed_emails=list(emails.failed_addresses),
        failed_order_emails=[recipient.email for recipient in orders.failed_recipients],
    )


def format_summary(summary: FulfillmentSummary, *, display_limit: int = 10) -> str:
    """
    Console block; failed addresses beyond ``display_limit`` are collapsed
    into an "... and N more" line.
    """

    lines = [
        "",
        _RULE,
        "SUMMARY",
        _RULE,
        f"Recipients processed:     {summary.total_recipients}",
        f"Duplicates removed:       {summary.duplicates_removed}",
        f"Unique recipients:        {summary.unique_recipients}",
        f"Orders created:           {summary.orders_created} ({summary.orders_created_pct}%)",
        f"Orders failed:            {summary.orders_failed}",
        f"Emails sent:              {summary.emails_sent} ({summary.emails_sent_pct}% of created orders)",
        f"Emails failed:            {summary.emails_failed}",
    ]

    if summary.orders_failed > 0:
        lines.append("")
        lines.append("Some orders failed to create. Check the logs above for details.")

    if summary.emails_failed > 0:
        lines.append("")
        lines.append("Some emails failed to send:")
        limit = max(1, display_limit)
        lines.extend(f"   - {email}" for email in summary.failed_emails[:limit])
        remaining = len(summary.failed_emails) - limit
        if remaining > 0:
            lines.append(f"   ... and {remaining} more")

    lines.append(_RULE)
    return "\n".join(lines)
