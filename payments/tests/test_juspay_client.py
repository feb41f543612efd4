import json
from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase
from jwcrypto import jwk

from payments.integrations.juspay import APIError, Juspay, JuspayConfig


def _fake_response(status_code=200, data=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.headers = {"Content-Type": "application/json"}
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = data if data is not None else {}
    return resp


class JuspayClientTests(SimpleTestCase):
    """Runs the client against a fake gateway holding its own RSA key pair."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        merchant = jwk.JWK.generate(kty="RSA", size=2048)
        bank = jwk.JWK.generate(kty="RSA", size=2048)
        cls.client_config = JuspayConfig(
            merchant_id="merchant_1",
            base_url="https://smartgatewayuat.hdfcbank.com/",
            key_id="key_1",
            public_key=bank.export_to_pem(),
            private_key=merchant.export_to_pem(private_key=True, password=None).decode("utf-8"),
        )
        # Same protocol seen from the gateway's side of the wire.
        cls.bank_side = Juspay(
            JuspayConfig(
                merchant_id="merchant_1",
                base_url="https://smartgatewayuat.hdfcbank.com",
                key_id="key_1",
                public_key=merchant.export_to_pem(),
                private_key=bank.export_to_pem(private_key=True, password=None),
            )
        )

    def setUp(self):
        self.juspay = Juspay(self.client_config)

    def test_session_request_is_signed_and_encrypted(self):
        reply = self.bank_side.encrypt({"id": "ordeh_1", "status": "NEW", "order_id": "order_1"})
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(200, reply)) as post:
            data = self.juspay.order_session.create(order_id="order_1", amount="250.00", action="paymentPage")

        url = post.call_args.args[0]
        self.assertEqual(url, "https://smartgatewayuat.hdfcbank.com/v4/session")
        headers = post.call_args.kwargs["headers"]
        self.assertEqual(headers["x-merchantid"], "merchant_1")

        sent = self.bank_side.decrypt(post.call_args.kwargs["json"])
        self.assertEqual(sent["order_id"], "order_1")
        self.assertEqual(sent["amount"], "250.00")
        self.assertEqual(sent["merchant_id"], "merchant_1")

        self.assertEqual(data["id"], "ordeh_1")
        self.assertEqual(data["http"]["status_code"], 200)
        self.assertEqual(data["http"]["url"], url)

    def test_order_status_plain_json_response(self):
        reply = {"order_id": "order_2", "status": "CHARGED"}
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(200, reply)) as post:
            data = self.juspay.order.status("order_2")

        self.assertEqual(post.call_args.args[0], "https://smartgatewayuat.hdfcbank.com/v4/order-status")
        self.assertEqual(self.bank_side.decrypt(post.call_args.kwargs["json"])["order_id"], "order_2")
        self.assertEqual(data["status"], "CHARGED")
        self.assertIn("http", data)

    def test_gateway_error_raises_api_error(self):
        reply = {"status": "invalid_request_error", "error_code": "access_denied", "error_message": "Invalid order id"}
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(400, reply)):
            with self.assertRaises(APIError) as cm:
                self.juspay.order.status("nope")

        self.assertEqual(cm.exception.message, "Invalid order id")
        self.assertEqual(cm.exception.status_code, 400)
        self.assertEqual(cm.exception.error_code, "access_denied")

    def test_encrypted_gateway_error_is_decrypted(self):
        reply = self.bank_side.encrypt({"user_message": "Amount too low"})
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(400, reply)):
            with self.assertRaises(APIError) as cm:
                self.juspay.order_session.create(order_id="order_3", amount="0.01")

        self.assertEqual(cm.exception.message, "Amount too low")

    def test_non_json_error_page_is_not_api_error(self):
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(502, json_error=True)):
            with self.assertRaises(ValueError):
                self.juspay.order.status("order_4")

    def test_json_error_without_message_uses_http_code(self):
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(503, {})):
            with self.assertRaises(APIError) as cm:
                self.juspay.order.status("order_4")

        self.assertEqual(cm.exception.message, "HTTP 503")

    def test_non_json_success_is_not_api_error(self):
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(200, json_error=True)):
            with self.assertRaises(ValueError):
                self.juspay.order.status("order_5")

    def test_transport_failure_propagates(self):
        with patch("payments.integrations.juspay.requests.post", side_effect=requests.ConnectionError("down")):
            with self.assertRaises(requests.ConnectionError):
                self.juspay.order.status("order_6")

    def test_tampered_reply_fails_verification(self):
        # Encrypted to the merchant but signed by a key that is not the gateway's.
        impostor = jwk.JWK.generate(kty="RSA", size=2048)
        forged = Juspay(
            JuspayConfig(
                merchant_id="merchant_1",
                base_url="https://example.com",
                key_id="key_1",
                public_key=self.bank_side.config.public_key,
                private_key=impostor.export_to_pem(private_key=True, password=None),
            )
        ).encrypt({"status": "CHARGED"})
        with patch("payments.integrations.juspay.requests.post", return_value=_fake_response(200, forged)):
            with self.assertRaises(Exception) as cm:
                self.juspay.order.status("order_7")

        self.assertNotIsInstance(cm.exception, APIError)

    def test_envelope_detection(self):
        self.assertTrue(Juspay.is_envelope(dict.fromkeys(["header", "encryptedKey", "iv", "encryptedPayload", "tag"], "x")))
        self.assertFalse(Juspay.is_envelope({"header": "x"}))
        self.assertFalse(Juspay.is_envelope(json.dumps({"header": "x"})))
