"""
tests/test_email_renderer.py

Order re-read, skip rules, and the HTML template.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fakes import InMemoryTicketingStore
from fulfillment.domain import (
    ComplementaryOrderSpec,
    EventDetail,
    OrderDetail,
    TicketDetail,
    TicketTypeDetail,
    TicketTypeRef,
)
from fulfillment.rendering import build_ticket_url, group_tickets_by_type, render_complementary_ticket_email
from fulfillment.rendering.complementary_ticket_email import format_event_datetime, format_event_time
from fulfillment.services.email_renderer import EmailRenderer
from fulfillment.services.ticket_type_provisioner import build_ticket_type_spec

BASE_URL = "https://usetroptix.com"
FROM = "TropTix <info@usetroptix.com>"


def _seed_orders(store: InMemoryTicketingStore, event: EventDetail, emails: list[str]) -> list[str]:
    ticket_type: TicketTypeRef = store.create_ticket_type(
        build_ticket_type_spec(
            event=event,
            name="Two Day Ticket - Complementary",
            quantity=len(emails),
            now=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
    )

    def create(tx):
        ids = []
        for index, email in enumerate(emails):
            ids.append(
                tx.create_order_with_ticket(
                    ComplementaryOrderSpec(
                        order_id=f"ord-{index}",
                        ticket_id=f"tkt-{index}",
                        ticket_type_id=ticket_type.id,
                        event_id=event.id,
                        email=email,
                        first_name="Guest",
                        last_name=str(index),
                    )
                )
            )
        tx.increment_quantity_sold(ticket_type.id, len(emails))
        return ids

    return store.run_transaction(create, max_wait_seconds=10, timeout_seconds=30)


@pytest.fixture()
def renderer(store: InMemoryTicketingStore) -> EmailRenderer:
    return EmailRenderer(store=store, email_from=FROM, base_url=BASE_URL)


class TestEmailRenderer:
    def test_renders_one_payload_per_order_in_order(
        self, renderer: EmailRenderer, store: InMemoryTicketingStore, event: EventDetail
    ) -> None:
        order_ids = _seed_orders(store, event, ["a@x.com", "b@x.com", "c@x.com"])

        payloads = renderer.render_all(order_ids)

        assert [payload.to for payload in payloads] == ["a@x.com", "b@x.com", "c@x.com"]
        assert all(payload.from_address == FROM for payload in payloads)
        assert payloads[0].subject == "You've received complimentary tickets for Carnival Weekend"
        assert "/orders/ord-0/tickets" in payloads[0].html

    def test_missing_order_is_skipped(
        self, renderer: EmailRenderer, store: InMemoryTicketingStore, event: EventDetail
    ) -> None:
        order_ids = _seed_orders(store, event, ["a@x.com", "b@x.com"])
        store.missing_order_ids.add(order_ids[0])

        payloads = renderer.render_all(order_ids)

        assert [payload.to for payload in payloads] == ["b@x.com"]
        assert store.detail_reads == order_ids

    def test_order_without_email_is_skipped(
        self, renderer: EmailRenderer, store: InMemoryTicketingStore, event: EventDetail
    ) -> None:
        order_ids = _seed_orders(store, event, ["a@x.com", "b@x.com"])
        store.blank_email(order_ids[1])

        payloads = renderer.render_all(order_ids)

        assert [payload.to for payload in payloads] == ["a@x.com"]

    def test_template_failure_skips_only_that_order(
        self, store: InMemoryTicketingStore, event: EventDetail
    ) -> None:
        order_ids = _seed_orders(store, event, ["a@x.com", "b@x.com"])

        def flaky_render(order: OrderDetail, *, base_url: str) -> str:
            if order.email == "a@x.com":
                raise ValueError("boom")
            return "<p>ok</p>"

        renderer = EmailRenderer(store=store, email_from=FROM, base_url=BASE_URL, render_fn=flaky_render)

        payloads = renderer.render_all(order_ids)

        assert [payload.to for payload in payloads] == ["b@x.com"]
        assert payloads[0].html == "<p>ok</p>"

    def test_empty_input(self, renderer: EmailRenderer) -> None:
        assert renderer.render_all([]) == []


def _order(event: EventDetail, tickets: list[TicketDetail]) -> OrderDetail:
    return OrderDetail(
        id="ord-42",
        email="guest@example.com",
        first_name="Guest",
        last_name="One",
        event=event,
        tickets=tickets,
    )


class TestTemplate:
    def test_ticket_url_carries_tracking_parameters(self) -> None:
        assert build_ticket_url("https://usetroptix.com/", "ord-1") == (
            "https://usetroptix.com/orders/ord-1/tickets"
            "?utm_source=complementary_email&utm_medium=email&utm_campaign=complementary_tickets"
        )

    def test_groups_tickets_by_type_in_first_seen_order(self) -> None:
        vip = TicketTypeDetail(id="t-vip", name="VIP")
        comp = TicketTypeDetail(id="t-comp", name="Comp")
        tickets = [
            TicketDetail(id="1", ticket_type=comp),
            TicketDetail(id="2", ticket_type=vip),
            TicketDetail(id="3", ticket_type=comp),
            TicketDetail(id="4"),
        ]

        groups = group_tickets_by_type(tickets)

        assert [(g.ticket_type.name if g.ticket_type else None, g.quantity) for g in groups] == [
            ("Comp", 2),
            ("VIP", 1),
            (None, 1),
        ]

    def test_event_times_are_shown_in_new_york(self) -> None:
        start = datetime(2025, 3, 15, 23, 0, tzinfo=timezone.utc)

        assert format_event_datetime(start) == "Sat, Mar 15, 7:00 PM"
        assert format_event_time(datetime(2025, 3, 16, 4, 0, tzinfo=timezone.utc)) == "12:00 AM"

    def test_naive_datetimes_are_read_as_utc(self) -> None:
        assert format_event_time(datetime(2025, 1, 10, 17, 30)) == "12:30 PM"

    def test_body_contains_event_details(self, event: EventDetail) -> None:
        order = _order(event, [TicketDetail(id="1", ticket_type=TicketTypeDetail(id="t", name="Comp"))])

        html = render_complementary_ticket_email(order, base_url=BASE_URL)

        assert "You&#39;ve received complimentary tickets!" in html
        assert "Carnival Weekend" in html
        assert 'src="https://cdn.example.com/carnival.png"' in html
        assert "1 Harbour Road, Port of Spain" in html
        assert "Sat, Mar 15, 7:00 PM – 12:00 AM" in html
        assert "ord-42" in html
        assert "1 ticket" in html
        assert "View Your Tickets" in html
        assert "gifted to you by the event organizer" in html

    def test_optional_blocks_are_omitted(self) -> None:
        bare_event = EventDetail(
            id="e",
            name="Fish & Chips Night",
            start_date=datetime(2025, 7, 4, 22, 0, tzinfo=timezone.utc),
        )
        order = _order(bare_event, [TicketDetail(id="1"), TicketDetail(id="2")])

        html = render_complementary_ticket_email(order, base_url=BASE_URL)

        assert "<img" not in html
        assert ">Venue<" not in html
        assert "Fish &amp; Chips Night" in html
        assert "Fri, Jul 4, 6:00 PM</p>" in html
        assert "2 tickets" in html
        assert ">Ticket<" in html
