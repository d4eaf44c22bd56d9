"""
Dropman configuration.

Usage in settings.py:
    DROPMAN = {
        "REWARD_EVERY": 10,
        "REGISTRATION_URL": "https://rewards.example.com/",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class DropmanSettings:
    """Dropman configuration settings."""

    # Store backend (dotted path to a RewardsStore implementation)
    STORE_BACKEND: str = "dropman.adapters.django_store.DjangoRewardsStore"

    # One flat reward unlocked per REWARD_EVERY cumulative units
    REWARD_EVERY: int = 10

    # Digits required after phone normalization
    PHONE_DIGITS: int = 10

    # Stamp used on drop-offs recorded without a staff identifier
    UNKNOWN_STAFF: str = "Unknown"

    # Registration page encoded in the printed QR code
    REGISTRATION_URL: str = "https://web20rewards.onrender.com/"
    QR_FILL_COLOR: str = "#4169E1"
    QR_BACK_COLOR: str = "#FFFFFF"
    QR_BORDER: int = 2
    QR_SIZE: int = 1000


def get_dropman_settings() -> DropmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "DROPMAN", {})
    return DropmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_dropman_settings(), name)


dropman_settings = _LazySettings()
