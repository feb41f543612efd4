import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "juspaygw.settings.base")

application = get_wsgi_application()

from payments.gateway import get_gateway  # noqa: E402

get_gateway()
