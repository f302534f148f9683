"""
fulfillment/services/deduplicator.py

Collapses candidate rows to unique recipients by case-insensitive e-mail.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fulfillment.domain import CandidateRecord, DedupResult, Recipient, normalize_email_key

logger = logging.getLogger(__name__)

_LOGGED_DUPLICATES = 5


def deduplicate_recipients(records: Iterable[CandidateRecord]) -> DedupResult:
    """
    Keep the first occurrence of each trimmed, lower-cased e-mail.

    The kept recipient retains the first row's casing and names; later rows
    with the same key are dropped and counted.
    """

    unique: dict[str, Recipient] = {}
    duplicates: list[str] = []

    for record in records:
        key = normalize_email_key(record.email)
        if key in unique:
            duplicates.append(record.email)
            continue
        unique[key] = Recipient(
            email=record.email.strip(),
            first_name=record.first_name.strip(),
            last_name=record.last_name.strip(),
        )

    if duplicates:
        shown = ", ".join(duplicates[:_LOGGED_DUPLICATES])
        ellipsis = "..." if len(duplicates) > _LOGGED_DUPLICATES else ""
        logger.info("Duplicates removed=%d emails=%s%s", len(duplicates), shown, ellipsis)

    return DedupResult(
        recipients=list(unique.values()),
        duplicates_removed=len(duplicates),
        duplicate_emails=duplicates,
    )
