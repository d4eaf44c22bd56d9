"""Tests for the dropman_qrcode management command."""

from io import StringIO

from django.core.management import call_command
from PIL import Image

from dropman.qr import build_registration_qr

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class TestQRCodeCommand:
    def test_writes_png(self, tmp_path):
        output = tmp_path / "signs" / "loyalty-qr-code.png"
        stdout = StringIO()

        call_command("dropman_qrcode", output=str(output), stdout=stdout)

        assert output.read_bytes()[:8] == PNG_MAGIC
        assert f"QR code generated: {output}" in stdout.getvalue()
        assert "URL encoded: https://rewards.example.com/" in stdout.getvalue()

    def test_url_override(self, tmp_path):
        output = tmp_path / "qr.png"
        stdout = StringIO()

        call_command(
            "dropman_qrcode", url="https://example.org/join", output=str(output), stdout=stdout
        )

        assert output.exists()
        assert "URL encoded: https://example.org/join" in stdout.getvalue()


class TestBuildRegistrationQR:
    def test_size_and_colors(self, tmp_path):
        output = tmp_path / "qr.png"
        build_registration_qr().save(output)

        with Image.open(output) as image:
            rgb = image.convert("RGB")
            width, height = rgb.size
            assert width == height
            assert 900 < width <= 1000
            # Corner pixel sits in the light border
            assert rgb.getpixel((0, 0)) == (255, 255, 255)
            assert (65, 105, 225) in {color for _, color in rgb.getcolors(maxcolors=4096)}
