"""
fulfillment/schemas/summary.py

JSON output schema for the end-of-run report.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from fulfillment.domain import FulfillmentSummary


class FulfillmentSummaryResponse(BaseModel):
    """
    Machine-readable form of FulfillmentSummary printed by ``--json``.
    """

    total_recipients: int = Field(..., ge=0)
    duplicates_removed: int = Field(..., ge=0)
    unique_recipients: int = Field(..., ge=0)
    orders_created: int = Field(..., ge=0)
    orders_failed: int = Field(..., ge=0)
    orders_created_pct: int = Field(..., ge=0, le=100)
    emails_rendered: int = Field(..., ge=0)
    emails_sent: int = Field(..., ge=0)
    emails_sent_pct: int = Field(..., ge=0, le=100)
    emails_failed: int = Field(..., ge=0)
    failed_emails: list[str] = Field(default_factory=list)
    failed_order_emails: list[str] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: FulfillmentSummary) -> "FulfillmentSummaryResponse":
        return cls(
            total_recipients=summary.total_recipients,
            duplicates_removed=summary.duplicates_removed,
            unique_recipients=summary.unique_recipients,
            orders_created=summary.orders_created,
            orders_failed=summary.orders_failed,
            orders_created_pct=summary.orders_created_pct,
            emails_rendered=summary.emails_rendered,
            emails_sent=summary.emails_sent,
            emails_sent_pct=summary.emails_sent_pct,
            emails_failed=summary.emails_failed,
            failed_emails=list(summary.failed_emails),
            failed_order_emails=list(summary.failed_order_emails),
        )
