"""Client for the Juspay (HDFC SmartGateway) JWE API.

Every request body is signed with the merchant private key (JWS, RS256)
and then encrypted to the gateway public key (JWE, RSA-OAEP-256 +
A256GCM). The gateway answers with the same envelope::

    {"header": ..., "encryptedKey": ..., "iv": ..., "encryptedPayload": ..., "tag": ...}

which is decrypted with the merchant private key and verified against the
gateway public key. Plain JSON answers (error pages, some UAT tenants) are
used as they are.
"""
import json
import logging

import requests
from jwcrypto import jwe, jwk, jws
from jwcrypto.common import json_encode

logger = logging.getLogger(__name__)

COMMON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
ENVELOPE_KEYS = ("header", "encryptedKey", "iv", "encryptedPayload", "tag")

SESSION_PATH = "/v4/session"
ORDER_STATUS_PATH = "/v4/order-status"


class APIError(Exception):
    """The gateway rejected the request (non-2xx answer)."""

    def __init__(self, message, status_code=None, error_code=None, response=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.response = response

    @classmethod
    def from_response(cls, status_code: int, data: dict) -> "APIError":
        message = (
            data.get("error_message")
            or data.get("user_message")
            or data.get("message")
            or data.get("status")
            or f"HTTP {status_code}"
        )
        return cls(str(message), status_code=status_code, error_code=data.get("error_code"), response=data)


def _load_pem(pem) -> jwk.JWK:
    if isinstance(pem, (bytes, bytearray)):
        pem_bytes = bytes(pem)
    else:
        pem_bytes = str(pem).encode("utf-8")
    pem_bytes = pem_bytes.replace(b"\r\n", b"\n")
    return jwk.JWK.from_pem(pem_bytes)


class JuspayConfig:
    def __init__(self, merchant_id: str, base_url: str, key_id: str, public_key, private_key, timeout: float = 30):
        self.merchant_id = merchant_id
        self.base_url = base_url.rstrip("/")
        self.key_id = key_id
        self.public_key = public_key
        self.private_key = private_key
        self.timeout = timeout


class OrderSession:
    def __init__(self, client: "Juspay"):
        self._client = client

    def create(self, **params) -> dict:
        """Create a hosted payment-page session for a new order."""
        return self._client.request(SESSION_PATH, params)


class Order:
    def __init__(self, client: "Juspay"):
        self._client = client

    def status(self, order_id: str) -> dict:
        """Fetch the gateway's current view of ``order_id``."""
        return self._client.request(ORDER_STATUS_PATH, {"order_id": order_id})


class Juspay:
    """Gateway client. Keys are parsed once here and never mutated after."""

    def __init__(self, config: JuspayConfig):
        self.config = config
        self._gateway_key = _load_pem(config.public_key)
        self._merchant_key = _load_pem(config.private_key)
        self.order_session = OrderSession(self)
        self.order = Order(self)

    # ---------- envelope ----------
    def encrypt(self, payload: dict) -> dict:
        """Sign ``payload`` with the merchant key, then encrypt to the gateway key."""
        signer = jws.JWS(json.dumps(payload).encode("utf-8"))
        signer.add_signature(
            self._merchant_key,
            alg="RS256",
            protected=json_encode({"alg": "RS256", "kid": self.config.key_id}),
        )
        header, body, signature = signer.serialize(compact=True).split(".")
        signed = json.dumps({"header": header, "payload": body, "signature": signature})

        token = jwe.JWE(
            plaintext=signed.encode("utf-8"),
            protected=json_encode({"alg": "RSA-OAEP-256", "enc": "A256GCM", "kid": self.config.key_id}),
        )
        token.add_recipient(self._gateway_key)
        return dict(zip(ENVELOPE_KEYS, token.serialize(compact=True).split(".")))

    def decrypt(self, envelope: dict) -> dict:
        """Decrypt a gateway envelope and verify the signature inside it."""
        token = jwe.JWE()
        token.deserialize(".".join(envelope[k] for k in ENVELOPE_KEYS))
        token.decrypt(self._merchant_key)
        signed = json.loads(token.payload.decode("utf-8"))

        verifier = jws.JWS()
        verifier.deserialize(f"{signed['header']}.{signed['payload']}.{signed['signature']}")
        verifier.verify(self._gateway_key)
        return json.loads(verifier.payload)

    @staticmethod
    def is_envelope(data) -> bool:
        return isinstance(data, dict) and all(k in data for k in ENVELOPE_KEYS)

    # ---------- transport ----------
    def request(self, path: str, payload: dict) -> dict:
        body = dict(payload)
        body["merchant_id"] = self.config.merchant_id
        url = f"{self.config.base_url}{path}"
        headers = {**COMMON_HEADERS, "x-merchantid": self.config.merchant_id}

        logger.debug("Juspay POST %s order_id=%s", url, body.get("order_id"))
        resp = requests.post(url, json=self.encrypt(body), headers=headers, timeout=self.config.timeout)

        # Non-JSON bodies raise on any status; only gateway JSON becomes APIError.
        data = resp.json()
        if self.is_envelope(data):
            data = self.decrypt(data)
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected gateway response type: {type(data).__name__}")

        if not resp.ok:
            raise APIError.from_response(resp.status_code, data)

        data["http"] = {
            "url": url,
            "method": "POST",
            "status_code": resp.status_code,
            "headers": dict(resp.headers),
        }
        return data
