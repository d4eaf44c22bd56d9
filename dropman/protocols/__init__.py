"""Dropman protocols."""

from dropman.protocols.rewards import (
    CustomerHistory,
    CustomerRecord,
    DropoffRecord,
    RewardsStore,
    RewardTier,
    StaffRecord,
    StatsSummary,
)

__all__ = [
    "RewardsStore",
    "RewardTier",
    # Records
    "CustomerRecord",
    "DropoffRecord",
    "StaffRecord",
    "CustomerHistory",
    "StatsSummary",
]
