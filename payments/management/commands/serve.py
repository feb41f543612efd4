from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand

from payments.gateway import get_gateway


class Command(BaseCommand):
    help = "Run the development server on settings.PORT (PORT env var, default 5000)"

    def add_arguments(self, parser):
        parser.add_argument("--host", default="0.0.0.0")

    def handle(self, *args, **opts):
        # Fails here, before binding the port, when the keys are unusable.
        get_gateway()
        port = settings.PORT
        self.stdout.write(self.style.SUCCESS(f"Juspay server running at http://localhost:{port}"))
        call_command("runserver", f"{opts['host']}:{port}")
