"""Startup configuration helpers used by the settings module."""
import json
import logging
import os

from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

REQUIRED_CONFIG_KEYS = ("MERCHANT_ID", "KEY_UUID", "PAYMENT_PAGE_CLIENT_ID")


def load_config_file(path) -> dict:
    """Read the merchant config file (``config.json``).

    Raises :class:`ImproperlyConfigured` when the file is missing, is not a
    JSON object, or lacks one of ``REQUIRED_CONFIG_KEYS``.
    """
    try:
        with open(path) as fh:
            data = json.load(fh)
    except FileNotFoundError:
        raise ImproperlyConfigured(f"Juspay config file not found: {path}")
    except ValueError as e:
        raise ImproperlyConfigured(f"Juspay config file {path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ImproperlyConfigured(f"Juspay config file {path} must contain a JSON object")
    missing = [k for k in REQUIRED_CONFIG_KEYS if not data.get(k)]
    if missing:
        raise ImproperlyConfigured(f"Juspay config file {path} is missing: {', '.join(missing)}")
    return data


def require_key_env(name: str) -> str:
    """Return PEM key material from the environment variable ``name``.

    Hosting dashboards often store multi-line values with literal ``\\n``;
    those are expanded back to newlines.
    """
    value = os.getenv(name)
    if not value:
        logger.error("%s is missing in the environment", name)
        raise ImproperlyConfigured(f"{name} environment variable is required")
    return value.replace("\\n", "\n")
