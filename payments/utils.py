import time

DEFAULT_AMOUNT = "100.00"  # demo amount in INR
DEFAULT_CUSTOMER_ID = "test_customer_1"
DEFAULT_ERROR_MESSAGE = "Something went wrong"

STATUS_MESSAGES = {
    "CHARGED": "✅ Payment successful",
    "PENDING": "⏳ Payment is pending",
    "PENDING_VBV": "⏳ Payment is pending",
    "AUTHORIZATION_FAILED": "❌ Authorization failed",
    "AUTHENTICATION_FAILED": "❌ Authentication failed",
}


def generate_order_id(prefix="order") -> str:
    # Millisecond timestamp only, two requests in the same millisecond collide.
    return f"{prefix}_{int(time.time() * 1000)}"


def status_message(status) -> str:
    return STATUS_MESSAGES.get(status) or f"Order status: {status}"


def clean_response(response):
    """Copy of a gateway payload without the ``http`` transport metadata."""
    if not response:
        return response
    rsp = dict(response)
    rsp.pop("http", None)
    return rsp


def make_error(message=None) -> dict:
    return {"success": False, "message": message or DEFAULT_ERROR_MESSAGE}
