"""
tests/test_resend_client.py

ResendBatchClient against a mocked requests.Session.
"""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

import requests

from fulfillment.config import ResendSettings
from fulfillment.delivery import DeliveryRequestError, ResendBatchClient
from fulfillment.domain import EmailPayload


def _payload(to: str = "ann@x.com") -> EmailPayload:
    return EmailPayload(
        from_address="TropTix <info@usetroptix.com>",
        to=to,
        subject="You've received complimentary tickets for Carnival Weekend",
        html="<p>hi</p>",
    )


def _response(status: int, body: object) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.json.return_value = body
    return response


class TestResendBatchClient(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = ResendBatchClient(
            settings=ResendSettings(api_key="re_test", base_url="https://api.resend.test/", timeout_seconds=5.0),
            session=self.session,
        )

    def test_requires_api_key(self) -> None:
        with self.assertRaises(ValueError):
            ResendBatchClient(settings=ResendSettings(api_key=None), session=self.session)

    def test_posts_one_request_per_batch(self) -> None:
        self.session.post.return_value = _response(200, {"data": [{"id": "m1"}, {"id": "m2"}]})

        result = self.client.send_batch([_payload("a@x.com"), _payload("b@x.com")])

        self.assertTrue(result.ok)
        self.assertEqual(result.message_ids, ("m1", "m2"))
        self.session.post.assert_called_once()
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://api.resend.test/emails/batch")
        self.assertEqual(kwargs["timeout"], 5.0)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer re_test")
        self.assertEqual(
            kwargs["json"][0],
            {
                "from": "TropTix <info@usetroptix.com>",
                "to": ["a@x.com"],
                "subject": "You've received complimentary tickets for Carnival Weekend",
                "html": "<p>hi</p>",
            },
        )

    def test_http_error_becomes_failed_result(self) -> None:
        self.session.post.return_value = _response(
            429, {"name": "rate_limit_exceeded", "message": "Too many requests"}
        )

        result = self.client.send_batch([_payload()])

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "Too many requests")

    def test_http_error_without_body_reports_status(self) -> None:
        response = _response(502, None)
        response.json.side_effect = ValueError("no json")
        self.session.post.return_value = response

        result = self.client.send_batch([_payload()])

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "HTTP 502")

    def test_error_field_on_success_status_is_a_failure(self) -> None:
        self.session.post.return_value = _response(200, {"error": {"message": "invalid from"}})

        result = self.client.send_batch([_payload()])

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "invalid from")

    def test_message_without_data_on_success_status_is_a_failure(self) -> None:
        self.session.post.return_value = _response(200, {"message": "Domain not verified"})

        result = self.client.send_batch([_payload()])

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "Domain not verified")

    def test_message_alongside_data_is_still_sent(self) -> None:
        self.session.post.return_value = _response(200, {"message": "queued", "data": [{"id": "m1"}]})

        result = self.client.send_batch([_payload()])

        self.assertTrue(result.ok)
        self.assertEqual(result.message_ids, ("m1",))

    def test_transport_failure_raises(self) -> None:
        self.session.post.side_effect = requests.ConnectionError("reset")

        with self.assertRaises(DeliveryRequestError):
            self.client.send_batch([_payload()])
        self.assertEqual(self.session.post.call_count, 1)

    def test_oversized_batch_is_rejected_locally(self) -> None:
        result = self.client.send_batch([_payload(f"u{i}@x.com") for i in range(101)])

        self.assertFalse(result.ok)
        self.session.post.assert_not_called()

    def test_empty_batch_is_a_no_op(self) -> None:
        self.assertTrue(self.client.send_batch([]).ok)
        self.session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
