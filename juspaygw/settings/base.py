from dotenv import load_dotenv
load_dotenv()

import os
from pathlib import Path

from juspaygw.config import load_config_file, require_key_env

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-juspay-facade")
DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "payments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "juspaygw.urls"
WSGI_APPLICATION = "juspaygw.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

# Nothing is persisted; the gateway is the source of truth for orders.
DATABASES = {}

USE_TZ = True
TIME_ZONE = "Asia/Kolkata"
STATIC_URL = "static/"

PORT = int(os.getenv("PORT", "5000"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": os.getenv("DJANGO_LOG_LEVEL", "INFO")},
}

# ---------- Juspay / HDFC SmartGateway ----------
SANDBOX_BASE_URL = "https://smartgatewayuat.hdfcbank.com"
PRODUCTION_BASE_URL = "https://smartgateway.hdfcbank.com"

JUSPAY_CONFIG_PATH = os.getenv("JUSPAY_CONFIG_PATH", str(BASE_DIR / "config.json"))
_juspay_file = load_config_file(JUSPAY_CONFIG_PATH)

JUSPAY = {
    "MERCHANT_ID": _juspay_file["MERCHANT_ID"],
    "KEY_UUID": _juspay_file["KEY_UUID"],
    "PAYMENT_PAGE_CLIENT_ID": _juspay_file["PAYMENT_PAGE_CLIENT_ID"],
    "RETURN_URL": _juspay_file.get("RETURN_URL", "https://jeyporedukaan.in/handleJuspayResponse"),
    "BASE_URL": SANDBOX_BASE_URL,  # PRODUCTION_BASE_URL for live
    # Gateway public key and merchant private key; startup fails without them.
    "PUBLIC_KEY": require_key_env("PUBLIC_KEY"),
    "PRIVATE_KEY": require_key_env("PRIVATE_KEY"),
    "TIMEOUT": 30,
}
