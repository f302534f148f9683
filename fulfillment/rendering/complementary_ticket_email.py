"""
HTML body for the "you've received complimentary tickets" e-mail.

Layout: brand bar, heading, event block with optional image, a
"View Your Tickets" button, venue / date / order number, the tickets grouped
by type, a gifted-by-organizer note, and a footer. Styles are inline because
most mail clients drop <style> blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from fulfillment.domain import OrderDetail, TicketDetail, TicketTypeDetail

EVENT_TIMEZONE = ZoneInfo("America/New_York")
BRAND_NAME = "TropTix"
TICKET_LINK_UTM = {
    "utm_source": "complementary_email",
    "utm_medium": "email",
    "utm_campaign": "complementary_tickets",
}

_ACCENT = "#6366f1"

_DOCUMENT_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1"></head>
<body style="background-color:#f8fafc;margin:0;padding:24px 0;">
<table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="max-width:480px;margin:0 auto;background:#ffffff;border-radius:12px;font-family:Helvetica,Arial,sans-serif;">
<tr><td style="background-color:{accent};font-size:1px;line-height:6px;">&nbsp;</td></tr>
<tr><td style="text-align:center;padding-top:20px;">
<a href="{base_url}" style="text-decoration:none;"><span style="font-size:28px;font-weight:bold;color:{accent};">{brand}</span></a>
</td></tr>
<tr><td style="padding:16px 24px 0;text-align:center;">
<h1 style="font-size:24px;color:#0f172a;margin:0;">You&#39;ve received complimentary tickets!</h1>
</td></tr>
<tr><td style="padding:24px;">
<p style="font-size:20px;font-weight:600;color:#334155;margin:0 0 16px;">{event_name}</p>
{image_block}
<p style="text-align:center;margin:0 0 24px;"><a href="{ticket_url}" style="display:inline-block;background-color:{accent};color:#ffffff;font-size:16px;font-weight:600;text-decoration:none;padding:12px 20px;border-radius:6px;">View Your Tickets</a></p>
<div style="font-size:14px;color:#475569;margin-bottom:24px;">
{venue_block}
<p style="font-weight:500;margin:12px 0 4px;color:#64748b;">Date &amp; Time</p>
<p style="margin:0;color:#0f172a;">{date_range}</p>
<p style="font-weight:500;margin:12px 0 4px;color:#64748b;">Order Number</p>
<p style="margin:0;color:#0f172a;">{order_id}</p>
</div>
<p style="font-size:14px;font-weight:bold;color:#000000;margin:24px 0 16px;">TICKET DETAILS</p>
<table cellpadding="0" cellspacing="0" style="width:100%;border-collapse:collapse;line-height:1.6;"><tbody>
{ticket_rows}
</tbody></table>
<div style="margin-top:24px;padding:16px;background-color:#eef2ff;border-radius:8px;">
<p style="font-size:14px;color:#475569;margin:0;text-align:center;">These tickets were gifted to you by the event organizer</p>
</div>
</td></tr>
<tr><td style="padding:0 24px;"><hr style="border:none;border-top:1px solid #e2e8f0;margin:32px 0;"></td></tr>
<tr><td style="font-size:12px;text-align:center;color:#94a3b8;padding:0 24px 24px;">Powered by <a href="{base_url}" style="text-decoration:underline;color:{accent};">{brand}</a>.</td></tr>
</table>
</body>
</html>
"""

_IMAGE_TEMPLATE = (
    '<img src="{src}" alt="{alt}" width="432" '
    'style="width:100%;margin-bottom:24px;border-radius:12px;display:block;">'
)

_VENUE_TEMPLATE = (
    '<p style="font-weight:500;margin:12px 0 4px;color:#64748b;">Venue</p>\n'
    '<p style="margin:0;color:#0f172a;">{address}</p>'
)

_TICKET_ROW_TEMPLATE = (
    '<tr><td style="font-size:14px;color:#0f172a;font-weight:500;padding:8px 16px 0 0;vertical-align:top;">{name}</td>'
    '<td style="font-size:14px;color:#0f172a;font-weight:500;text-align:right;padding-top:8px;">{quantity} {noun}</td></tr>'
)


@dataclass(frozen=True)
class TicketGroup:
    ticket_type: TicketTypeDetail | None
    quantity: int


def build_ticket_url(base_url: str, order_id: str) -> str:
    return f"{base_url.rstrip('/')}/orders/{order_id}/tickets?{urlencode(TICKET_LINK_UTM)}"


def group_tickets_by_type(tickets: list[TicketDetail]) -> list[TicketGroup]:
    """
    Count tickets per ticket type, keeping first-seen order.
    Tickets without a type collapse into one group.
    """

    counts: dict[str, int] = {}
    types: dict[str, TicketTypeDetail | None] = {}
    for ticket in tickets:
        key = ticket.ticket_type.id if ticket.ticket_type is not None else "Unknown"
        if key not in counts:
            counts[key] = 0
            types[key] = ticket.ticket_type
        counts[key] += 1
    return [TicketGroup(ticket_type=types[key], quantity=count) for key, count in counts.items()]


def format_event_datetime(value: datetime) -> str:
    """e.g. 'Fri, Mar 15, 7:00 PM' in the event's display timezone."""
    local = _localize(value)
    return f"{local:%a, %b} {local.day}, {format_event_time(value)}"


def format_event_time(value: datetime) -> str:
    """e.g. '11:00 PM'."""
    local = _localize(value)
    hour = local.hour % 12 or 12
    return f"{hour}:{local:%M} {'AM' if local.hour < 12 else 'PM'}"


def render_complementary_ticket_email(order: OrderDetail, *, base_url: str) -> str:
    """
    Render the complimentary-ticket e-mail body for one order.
    """

    event = order.event
    image_block = ""
    if event.image_url:
        image_block = _IMAGE_TEMPLATE.format(src=escape(event.image_url), alt=escape(event.name))

    venue_block = ""
    if event.address:
        venue_block = _VENUE_TEMPLATE.format(address=escape(event.address))

    date_range = format_event_datetime(event.start_date)
    if event.end_date is not None:
        date_range = f"{date_range} – {format_event_time(event.end_date)}"

    ticket_rows = "\n".join(
        _TICKET_ROW_TEMPLATE.format(
            name=escape(group.ticket_type.name if group.ticket_type is not None else "Ticket"),
            quantity=group.quantity,
            noun="ticket" if group.quantity == 1 else "tickets",
        )
        for group in group_tickets_by_type(order.tickets)
    )

    return _DOCUMENT_TEMPLATE.format(
        accent=_ACCENT,
        brand=BRAND_NAME,
        base_url=escape(base_url),
        event_name=escape(event.name),
        image_block=image_block,
        ticket_url=escape(build_ticket_url(base_url, order.id)),
        venue_block=venue_block,
        date_range=escape(date_range),
        order_id=escape(order.id),
        ticket_rows=ticket_rows,
    )


def _localize(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(EVENT_TIMEZONE)
