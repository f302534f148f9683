"""
tests/test_db_layer.py

Database URL resolution and the constraint names the store relies on.
No database connection is opened.
"""

from __future__ import annotations

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from db import config as db_config
from db.config import normalize_postgres_url, resolve_database_url
from db.models import Order, Ticket, TicketType


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db_config, "load_env_files", lambda: None)
    for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


class TestResolveDatabaseUrl:
    def test_normalizes_driver(self) -> None:
        assert normalize_postgres_url("postgres://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
        assert normalize_postgres_url("postgresql://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
        assert normalize_postgres_url("postgresql+psycopg://u@h/db") == "postgresql+psycopg://u@h/db"

    def test_database_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://direct/db")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgresql://local/db")

        assert resolve_database_url() == "postgresql+psycopg://direct/db"

    def test_cloud_url_only_in_cloud_environments(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLOUD_DATABASE_URL", "postgresql://cloud/db")
        monkeypatch.setenv("LOCAL_DATABASE_URL", "postgresql://local/db")

        monkeypatch.setenv("ENVIRONMENT", "production")
        assert resolve_database_url() == "postgresql+psycopg://cloud/db"

        monkeypatch.setenv("ENVIRONMENT", "development")
        assert resolve_database_url() == "postgresql+psycopg://local/db"

    def test_no_url_is_an_error(self) -> None:
        with pytest.raises(RuntimeError):
            resolve_database_url()


def _ddl(table) -> str:
    return str(CreateTable(table).compile(dialect=postgresql.dialect()))


class TestSchema:
    def test_ticket_type_constraints(self) -> None:
        ddl = _ddl(TicketType.__table__)

        assert "uq_ticket_types_event_id_name" in ddl
        assert "ck_ticket_types_quantity_sold_within_quantity" in ddl
        assert "ck_ticket_types_quantity_sold_non_negative" in ddl

    def test_ticket_belongs_to_order(self) -> None:
        ddl = _ddl(Ticket.__table__)

        assert "fk_tickets_order_id_orders" in ddl
        assert "ON DELETE CASCADE" in ddl
        assert Order.__table__.c.email.nullable is True
