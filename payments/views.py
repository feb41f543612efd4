import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .gateway import get_gateway
from .integrations.juspay import APIError
from .utils import (
    DEFAULT_AMOUNT,
    DEFAULT_CUSTOMER_ID,
    clean_response,
    generate_order_id,
    make_error,
    status_message,
)

logger = logging.getLogger(__name__)


def _request_data(request) -> dict:
    """JSON body when one was sent, otherwise the form fields.

    The hosted payment page redirects back with a form POST, while the
    demo page and API callers send JSON.
    """
    if request.content_type == "application/json":
        try:
            body = json.loads(request.body.decode("utf-8") or "{}")
        except (UnicodeDecodeError, ValueError):
            return {}
        return body if isinstance(body, dict) else {}
    return request.POST.dict()


def _gateway_error(error: APIError, order_id: str) -> JsonResponse:
    logger.warning(
        "Juspay rejected request for order_id=%s: status=%s code=%s message=%s",
        order_id,
        error.status_code,
        error.error_code,
        error.message,
    )
    return JsonResponse(make_error(error.message), status=400)


@require_GET
def index_view(request):
    return render(request, "payments/index.html")


@csrf_exempt
@require_POST
def initiate_payment_view(request):
    body = _request_data(request)

    order_id = generate_order_id()
    amount = body.get("amount") or DEFAULT_AMOUNT
    customer_id = body.get("customer_id") or DEFAULT_CUSTOMER_ID
    conf = settings.JUSPAY

    try:
        session = get_gateway().order_session.create(
            order_id=order_id,
            amount=str(amount),
            payment_page_client_id=conf["PAYMENT_PAGE_CLIENT_ID"],
            customer_id=str(customer_id),
            action="paymentPage",
            return_url=conf["RETURN_URL"],
            currency="INR",
        )
    except APIError as e:
        return _gateway_error(e, order_id)
    except Exception:
        logger.exception("Unexpected error creating Juspay session for order_id=%s", order_id)
        return JsonResponse(make_error(), status=500)

    logger.info("Juspay session created for order_id=%s", order_id)
    return JsonResponse(clean_response(session), status=200)


@csrf_exempt
@require_POST
def handle_response_view(request):
    body = _request_data(request)
    order_id = body.get("order_id") or body.get("orderId")
    if not order_id:
        return JsonResponse(make_error("order_id is missing"), status=400)

    try:
        result = get_gateway().order.status(order_id)
    except APIError as e:
        return _gateway_error(e, order_id)
    except Exception:
        logger.exception("Unexpected error fetching Juspay status for order_id=%s", order_id)
        return JsonResponse(make_error(), status=500)

    status = result.get("status")
    logger.info("Juspay order_id=%s status=%s", order_id, status)
    data = clean_response(result)
    data["message"] = status_message(status)
    return JsonResponse(data, status=200)
