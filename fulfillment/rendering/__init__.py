"""
E-mail templates.
"""

from fulfillment.rendering.complementary_ticket_email import (
    build_ticket_url,
    group_tickets_by_type,
    render_complementary_ticket_email,
)

__all__ = [
    "build_ticket_url",
    "group_tickets_by_type",
    "render_complementary_ticket_email",
]
