from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from jwcrypto.common import JWException

from .integrations.juspay import Juspay, JuspayConfig


@lru_cache(maxsize=None)
def get_gateway() -> Juspay:
    """Return the process-wide gateway client, built from ``settings.JUSPAY``.

    Called once at startup (WSGI/ASGI import, ``manage.py serve``) so that
    unreadable key material stops the process instead of failing requests.
    """
    conf = settings.JUSPAY
    try:
        return Juspay(
            JuspayConfig(
                merchant_id=conf["MERCHANT_ID"],
                base_url=conf["BASE_URL"],
                key_id=conf["KEY_UUID"],
                public_key=conf["PUBLIC_KEY"],
                private_key=conf["PRIVATE_KEY"],
                timeout=conf.get("TIMEOUT", 30),
            )
        )
    except (ValueError, TypeError, JWException) as e:
        raise ImproperlyConfigured(f"PUBLIC_KEY / PRIVATE_KEY could not be loaded as PEM keys: {e}") from e
