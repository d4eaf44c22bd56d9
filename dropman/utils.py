"""Small helpers shared by services, gates and the store adapters."""

import re
from datetime import date, datetime

from django.utils.dateparse import parse_date

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: str | None) -> str:
    """Strip every non-digit character. ``"(555) 123-4567"`` -> ``"5551234567"``."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", str(phone))


def coerce_date(value) -> date | None:
    """Return a calendar date from a date, datetime or ISO string; None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return parse_date(value.strip())
    except ValueError:
        return None


def month_bounds(day: date) -> tuple[date, date]:
    """First day of ``day``'s month and first day of the following month."""
    start = day.replace(day=1)
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


def coerce_id(value) -> int:
    """Primary keys arrive as ints or digit strings from the HTTP layer."""
    from dropman.exceptions import ValidationError

    if isinstance(value, bool):
        raise ValidationError(message="Customer ID is required", customer_id=value)
    if isinstance(value, int) and value > 0:
        return value
    if isinstance(value, str) and value.strip().isdigit() and int(value) > 0:
        return int(value)
    raise ValidationError(message="Customer ID is required", customer_id=value)
