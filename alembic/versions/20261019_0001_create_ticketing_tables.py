"""create events, ticket_types, orders and tickets tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), server_default=sa.text("0"), nullable=False)


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=2048), nullable=True),
        sa.Column("address", sa.String(length=512), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_start_date", "events", ["start_date"], unique=False)

    op.create_table(
        "ticket_types",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("ticket_type", sa.String(length=32), nullable=False),
        _money("price"),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("quantity_sold", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("max_purchase_per_user", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("sale_start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sale_end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ticketing_fees", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("quantity_sold >= 0", name="ck_ticket_types_quantity_sold_non_negative"),
        sa.CheckConstraint("quantity_sold <= quantity", name="ck_ticket_types_quantity_sold_within_quantity"),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.id"],
            name="fk_ticket_types_event_id_events",
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_ticket_types"),
        sa.UniqueConstraint("event_id", "name", name="uq_ticket_types_event_id_name"),
    )
    op.create_index("ix_ticket_types_event_id", "ticket_types", ["event_id"], unique=False)

    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        _money("total"),
        _money("subtotal"),
        _money("fees"),
        sa.Column("stripe_payment_id", sa.String(length=255), nullable=True),
        sa.Column("card_last4", sa.String(length=4), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.id"],
            name="fk_orders_event_id_events",
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_orders"),
    )
    op.create_index("ix_orders_event_id", "orders", ["event_id"], unique=False)
    op.create_index("ix_orders_email", "orders", ["email"], unique=False)

    op.create_table(
        "tickets",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("order_id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("ticket_type_id", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("tickets_type", sa.String(length=32), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        _money("total"),
        _money("subtotal"),
        _money("fees"),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["order_id"],
            ["orders.id"],
            name="fk_tickets_order_id_orders",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["event_id"],
            ["events.id"],
            name="fk_tickets_event_id_events",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["ticket_type_id"],
            ["ticket_types.id"],
            name="fk_tickets_ticket_type_id_ticket_types",
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_tickets"),
    )
    op.create_index("ix_tickets_order_id", "tickets", ["order_id"], unique=False)
    op.create_index("ix_tickets_ticket_type_id", "tickets", ["ticket_type_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tickets_ticket_type_id", table_name="tickets")
    op.drop_index("ix_tickets_order_id", table_name="tickets")
    op.drop_table("tickets")
    op.drop_index("ix_orders_email", table_name="orders")
    op.drop_index("ix_orders_event_id", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_ticket_types_event_id", table_name="ticket_types")
    op.drop_table("ticket_types")
    op.drop_index("ix_events_start_date", table_name="events")
    op.drop_table("events")
