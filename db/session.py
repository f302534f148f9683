"""
db/session.py

SQLAlchemy engine and session factory for the ticketing database.
"""

from __future__ import annotations

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def create_db_engine(*, pool_timeout: float | None = None) -> Engine:
    """
    Build a PostgreSQL engine.

    ``pool_timeout`` bounds how long a transaction waits to check out a
    connection; it defaults to TRANSACTION_MAX_WAIT_SECONDS.
    """

    database_url = resolve_database_url()
    if not database_url.startswith("postgresql"):
        raise RuntimeError("Only PostgreSQL URLs are supported.")

    if pool_timeout is None:
        pool_timeout = _get_float_env("TRANSACTION_MAX_WAIT_SECONDS", 10.0)

    return create_engine(
        database_url,
        echo=_get_bool_env("SQL_ECHO", default=False),
        pool_pre_ping=True,
        pool_recycle=_get_int_env("DB_POOL_RECYCLE", 1800),
        pool_size=_get_int_env("DB_POOL_SIZE", 5),
        max_overflow=_get_int_env("DB_MAX_OVERFLOW", 5),
        pool_timeout=max(0.1, pool_timeout),
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Session factory used by the ticketing store; each call opens its own session.
    """

    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
