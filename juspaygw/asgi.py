import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "juspaygw.settings.base")

application = get_asgi_application()

from payments.gateway import get_gateway  # noqa: E402

get_gateway()
