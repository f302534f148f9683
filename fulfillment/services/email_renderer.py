"""
fulfillment/services/email_renderer.py

Re-reads each committed order and renders its notification e-mail.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from fulfillment.domain import EmailPayload, OrderDetail
from fulfillment.errors import RenderError
from fulfillment.rendering import render_complementary_ticket_email
from fulfillment.repositories.base import TicketingStore

logger = logging.getLogger(__name__)

SUBJECT_TEMPLATE = "You've received complimentary tickets for {event_name}"

RenderFn = Callable[..., str]


class EmailRenderer:
    """
    Produces at most one EmailPayload per order id, in input order.

    A missing order or e-mail address right after the write stage points at
    a data-integrity problem; it is logged and skipped rather than retried.
    """

    def __init__(
        self,
        *,
        store: TicketingStore,
        email_from: str,
        base_url: str,
        progress_every: int = 50,
        render_fn: RenderFn = render_complementary_ticket_email,
    ) -> None:
        self._store = store
        self._email_from = email_from
        self._base_url = base_url
        self._progress_every = max(1, progress_every)
        self._render_fn = render_fn

    def render_all(self, order_ids: Sequence[str]) -> list[EmailPayload]:
        logger.info("Rendering e-mails orders=%d base_url=%s", len(order_ids), self._base_url)
        payloads: list[EmailPayload] = []
        total = len(order_ids)

        for position, order_id in enumerate(order_ids, start=1):
            try:
                payload = self.render_one(order_id)
            except RenderError as exc:
                logger.error("%s", exc)
                payload = None

            if payload is not None:
                payloads.append(payload)

            if position % self._progress_every == 0 or position == total:
                logger.info("Rendered %d/%d e-mails", position, total)

        return payloads

    def render_one(self, order_id: str) -> EmailPayload | None:
        """
        Return the payload, None for an order without an address, or raise
        RenderError when the lookup or the template fails.
        """

        try:
            order = self._store.find_order_detail(order_id)
        except Exception as exc:  # noqa: BLE001
            raise RenderError(order_id=order_id, cause=exc) from exc

        if order is None or not order.email:
            logger.warning("Skipping order %s: no order or e-mail address found", order_id)
            return None

        try:
            html = self._render_fn(order, base_url=self._base_url)
        except Exception as exc:  # noqa: BLE001
            raise RenderError(order_id=order_id, cause=exc) from exc

        return EmailPayload(
            from_address=self._email_from,
            to=order.email,
            subject=build_subject(order),
            html=html,
        )


def build_subject(order: OrderDetail) -> str:
    return SUBJECT_TEMPLATE.format(event_name=order.event.name)
