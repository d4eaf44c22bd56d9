"""Management command to generate the printable registration QR code."""

from django.core.management.base import BaseCommand

from dropman.conf import dropman_settings
from dropman.qr import write_registration_qr


class Command(BaseCommand):
    help = "Generate the registration page QR code as a PNG"

    def add_arguments(self, parser):
        parser.add_argument(
            "--url",
            default=None,
            help="Override REGISTRATION_URL setting",
        )
        parser.add_argument(
            "--output",
            default="loyalty-qr-code.png",
            help="PNG file to write (default: loyalty-qr-code.png)",
        )

    def handle(self, *args, **options):
        url = options["url"] or dropman_settings.REGISTRATION_URL
        path = write_registration_qr(options["output"], url)
        self.stdout.write(self.style.SUCCESS(f"QR code generated: {path}"))
        self.stdout.write(f"URL encoded: {url}")
