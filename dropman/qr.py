"""Registration QR code for printed signage."""

import logging
from pathlib import Path

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from dropman.conf import dropman_settings

logger = logging.getLogger(__name__)


def build_registration_qr(url: str | None = None):
    """
    Build the QR image pointing at the registration page.

    Sized to QR_SIZE pixels with a QR_BORDER module margin, in the
    configured fill/back colors.
    """
    url = url or dropman_settings.REGISTRATION_URL
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=dropman_settings.QR_BORDER)
    qr.add_data(url)
    qr.make(fit=True)

    modules = qr.modules_count + 2 * dropman_settings.QR_BORDER
    qr.box_size = max(1, dropman_settings.QR_SIZE // modules)
    return qr.make_image(
        fill_color=dropman_settings.QR_FILL_COLOR,
        back_color=dropman_settings.QR_BACK_COLOR,
    )


def write_registration_qr(output: str | Path, url: str | None = None) -> Path:
    """Write the registration QR code as PNG and return the path."""
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image = build_registration_qr(url)
    with output.open("wb") as fh:
        image.save(fh, format="PNG")
    logger.info("Registration QR code written to %s", output)
    return output
