"""
fulfillment/config.py

Environment-driven settings for the complimentary ticket pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

# Resend rejects batch requests with more than 100 messages.
RESEND_BATCH_CEILING = 100

DEFAULT_TICKET_TYPE_NAME = "Two Day Ticket - Complementary"
DEFAULT_EMAIL_FROM = "TropTix <info@usetroptix.com>"
DEVELOPMENT_BASE_URL = "http://localhost:3000"
PRODUCTION_BASE_URL = "https://usetroptix.com"


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def resolve_base_url(environment: str, override: str | None = None) -> str:
    """
    Public site URL used in e-mail links.
    """

    if override:
        return override.rstrip("/")
    if environment.strip().lower() == "development":
        return DEVELOPMENT_BASE_URL
    return PRODUCTION_BASE_URL


@dataclass(frozen=True)
class FulfillmentSettings:
    """
    Batch sizes, pacing, and fixed identifiers for one pipeline run.
    """

    order_batch_size: int = 50
    email_batch_size: int = RESEND_BATCH_CEILING
    inter_batch_delay_seconds: float = 1.0
    transaction_max_wait_seconds: float = 10.0
    transaction_timeout_seconds: float = 30.0
    ticket_type_name: str = DEFAULT_TICKET_TYPE_NAME
    email_from: str = DEFAULT_EMAIL_FROM
    base_url: str = PRODUCTION_BASE_URL
    failed_display_limit: int = 10
    render_progress_every: int = 50

    def __post_init__(self) -> None:
        if self.order_batch_size < 1:
            raise ValueError("order_batch_size must be at least 1.")
        if not 1 <= self.email_batch_size <= RESEND_BATCH_CEILING:
            raise ValueError(
                f"email_batch_size must be between 1 and {RESEND_BATCH_CEILING}."
            )
        if self.inter_batch_delay_seconds < 0:
            raise ValueError("inter_batch_delay_seconds cannot be negative.")
        if self.transaction_max_wait_seconds <= 0 or self.transaction_timeout_seconds <= 0:
            raise ValueError("Transaction timeouts must be positive.")


@dataclass(frozen=True)
class ResendSettings:
    """
    Resend e-mail API settings.
    """

    api_key: str | None = None
    base_url: str = "https://api.resend.com"
    timeout_seconds: float = 30.0


@lru_cache(maxsize=1)
def get_fulfillment_settings() -> FulfillmentSettings:
    """
    Return cached pipeline settings from environment variables.
    """

    environment = _get_str_env("ENVIRONMENT", "production")
    return FulfillmentSettings(
        order_batch_size=max(1, _get_int_env("ORDER_BATCH_SIZE", 50)),
        email_batch_size=min(
            RESEND_BATCH_CEILING,
            max(1, _get_int_env("EMAIL_BATCH_SIZE", RESEND_BATCH_CEILING)),
        ),
        inter_batch_delay_seconds=max(0.0, _get_float_env("EMAIL_INTER_BATCH_DELAY_SECONDS", 1.0)),
        transaction_max_wait_seconds=max(0.1, _get_float_env("TRANSACTION_MAX_WAIT_SECONDS", 10.0)),
        transaction_timeout_seconds=max(0.1, _get_float_env("TRANSACTION_TIMEOUT_SECONDS", 30.0)),
        ticket_type_name=_get_str_env("COMP_TICKET_TYPE_NAME", DEFAULT_TICKET_TYPE_NAME),
        email_from=_get_str_env("EMAIL_FROM", DEFAULT_EMAIL_FROM),
        base_url=resolve_base_url(environment, _get_optional_str_env("APP_BASE_URL")),
        failed_display_limit=max(1, _get_int_env("SUMMARY_FAILED_DISPLAY_LIMIT", 10)),
    )


@lru_cache(maxsize=1)
def get_resend_settings() -> ResendSettings:
    """
    Return Resend API settings from environment variables.
    """

    return ResendSettings(
        api_key=_get_optional_str_env("RESEND_API_KEY"),
        base_url=_get_str_env("RESEND_BASE_URL", "https://api.resend.com").rstrip("/"),
        timeout_seconds=max(1.0, _get_float_env("RESEND_TIMEOUT_SECONDS", 30.0)),
    )
