from django.core.management.base import BaseCommand

from payments.gateway import get_gateway
from payments.integrations.juspay import APIError
from payments.utils import status_message


class Command(BaseCommand):
    help = "Look up the current gateway status of one or more orders"

    def add_arguments(self, parser):
        parser.add_argument("order_ids", nargs="+")

    def handle(self, *args, **opts):
        gateway = get_gateway()
        for order_id in opts["order_ids"]:
            try:
                data = gateway.order.status(order_id)
            except APIError as e:
                self.stdout.write(self.style.WARNING(f"{order_id}: {e.message}"))
                continue
            status = data.get("status")
            self.stdout.write(self.style.SUCCESS(f"{order_id} -> {status} ({status_message(status)})"))
