"""Staff service - PIN login."""

import logging

from dropman.exceptions import Unauthorized, ValidationError
from dropman.protocols.rewards import RewardsStore, StaffRecord

logger = logging.getLogger(__name__)


def login(store: RewardsStore, pin: str) -> StaffRecord:
    """
    Look a staff member up by PIN.

    The PIN is compared as a plain string (leading zeros matter).

    Raises:
        ValidationError: If no PIN was given
        Unauthorized: If the PIN is not recognized
    """
    pin = str(pin).strip() if pin is not None else ""
    if not pin:
        raise ValidationError(message="PIN is required")

    staff = store.get_staff_by_pin(pin)
    if staff is None:
        logger.warning("Staff login failed: unknown PIN")
        raise Unauthorized()
    return staff
