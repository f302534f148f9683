"""
fulfillment/delivery/resend_client.py

Resend batch e-mail client over the REST API.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import requests

from fulfillment.config import RESEND_BATCH_CEILING, ResendSettings
from fulfillment.delivery.base import BatchSendResult, DeliveryRequestError, EmailDeliveryService
from fulfillment.domain import EmailPayload
from fulfillment.schemas.email import OutboundEmail

logger = logging.getLogger(__name__)

_BATCH_PATH = "/emails/batch"


class ResendBatchClient(EmailDeliveryService):
    """
    Sends one POST /emails/batch per call.

    Makes exactly one attempt: a failed batch is reported to the caller and
    never resubmitted, so no recipient receives the same message twice.
    """

    max_batch_size = RESEND_BATCH_CEILING

    def __init__(
        self,
        *,
        settings: ResendSettings,
        session: requests.Session | None = None,
    ) -> None:
        if not settings.api_key:
            raise ValueError("RESEND_API_KEY is required to send e-mail.")
        self._url = settings.base_url.rstrip("/") + _BATCH_PATH
        self._timeout_seconds = settings.timeout_seconds
        self._session = session or requests.Session()
        self._headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }

    def send_batch(self, messages: Sequence[EmailPayload]) -> BatchSendResult:
        if not messages:
            return BatchSendResult(ok=True)
        if len(messages) > self.max_batch_size:
            return BatchSendResult(
                ok=False,
                error=f"Batch of {len(messages)} exceeds the Resend limit of {self.max_batch_size}.",
            )

        body = [OutboundEmail.from_payload(message).to_request_dict() for message in messages]
        try:
            response = self._session.post(
                self._url,
                json=body,
                headers=self._headers,
                timeout=self._timeout_seconds,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            raise DeliveryRequestError(f"Resend request failed: {exc}") from exc

        payload = _safe_json(response)
        if not response.ok:
            error = _error_message(payload) or f"HTTP {response.status_code}"
            logger.error(
                "Resend batch rejected status=%s size=%s error=%s",
                response.status_code,
                len(messages),
                error,
            )
            return BatchSendResult(ok=False, error=error)

        if _is_error_body(payload):
            error = _error_message(payload) or "unknown error"
            logger.error("Resend batch returned an error body size=%s error=%s", len(messages), error)
            return BatchSendResult(ok=False, error=error)

        return BatchSendResult(ok=True, message_ids=_message_ids(payload))


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _is_error_body(payload: Any) -> bool:
    # A 2xx body is an error when it carries "error", or "message" without "data".
    if not isinstance(payload, dict):
        return False
    if payload.get("error"):
        return True
    return bool(payload.get("message")) and "data" not in payload


def _error_message(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or error.get("name") or error)
    if error:
        return str(error)
    message = payload.get("message")
    return str(message) if message else None


def _message_ids(payload: Any) -> tuple[str, ...]:
    if not isinstance(payload, dict):
        return ()
    data = payload.get("data")
    if not isinstance(data, list):
        return ()
    return tuple(str(item["id"]) for item in data if isinstance(item, dict) and "id" in item)
