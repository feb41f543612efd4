import os
from pathlib import Path

_ROOT = Path(__file__).resolve().parent.parent.parent
os.environ.setdefault("JUSPAY_CONFIG_PATH", str(_ROOT / "config.example.json"))
os.environ.setdefault("PUBLIC_KEY", "test-gateway-public-key")
os.environ.setdefault("PRIVATE_KEY", "test-merchant-private-key")

from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

ALLOWED_HOSTS = ['testserver']
