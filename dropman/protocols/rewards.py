"""Rewards store protocol and the records it exchanges."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol, runtime_checkable

from django.db import models
from django.utils.translation import gettext_lazy as _


class RewardTier(models.TextChoices):
    """Named reward tiers claimed manually by staff."""

    BRONZE = "bronze", _("Bronze")
    SILVER = "silver", _("Silver")
    GOLD = "gold", _("Gold")


@dataclass(frozen=True)
class CustomerRecord:
    """Customer snapshot as seen by the resolver and the ledger."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    referred_by: str | None
    total_dropoffs: int
    rewards_redeemed: int
    bronze_claimed: bool
    silver_claimed: bool
    gold_claimed: bool
    created_at: datetime
    updated_at: datetime

    @property
    def name(self) -> str:
        """Full name (first + last)."""
        return f"{self.first_name} {self.last_name}".strip()

    def tier_claimed(self, tier: str) -> bool:
        return getattr(self, f"{RewardTier(tier).value}_claimed")


@dataclass(frozen=True)
class DropoffRecord:
    """Immutable drop-off fact."""

    id: int
    customer_id: int
    quantity: int
    date: date
    added_by: str
    created_at: datetime


@dataclass(frozen=True)
class StaffRecord:
    """Staff identity. The PIN is never part of the record."""

    id: int
    name: str


@dataclass(frozen=True)
class CustomerHistory:
    """Customer with drop-offs ordered by date, most recent first."""

    customer: CustomerRecord
    eligible_rewards: int
    dropoffs: list[DropoffRecord] = field(default_factory=list)


@dataclass(frozen=True)
class StatsSummary:
    """Dashboard counters for one calendar month."""

    month: date  # first day of the month
    total_customers: int
    new_customers_this_month: int
    dropoffs_this_month: int
    total_dropoffs_all_time: int
    total_rewards_redeemed_all_time: int


@runtime_checkable
class RewardsStore(Protocol):
    """
    Persistence used by the identity resolver and the reward ledger.

    Implemented by adapters/django_store.py (ORM) and adapters/memory.py.
    Lookups return None when nothing matches; the services decide which
    error to raise. Implementations wrap backend failures in StoreError.

    Configuration in settings.py:
        DROPMAN = {
            "STORE_BACKEND": "dropman.adapters.memory.InMemoryRewardsStore",
        }
    """

    # Customers

    def get_customer(self, customer_id: int) -> CustomerRecord | None:
        ...

    def find_customer_by_phone(self, phone: str) -> CustomerRecord | None:
        """Exact match on the normalized phone."""
        ...

    def find_customer_by_identity(
        self,
        first_name: str,
        last_name: str,
        email: str,
    ) -> CustomerRecord | None:
        """Case-insensitive exact match on the (first, last, email) triple."""
        ...

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str | None,
        referred_by: str | None,
    ) -> CustomerRecord:
        """Raises ConflictError when a non-blank phone is already on file."""
        ...

    def update_customer(self, customer_id: int, **fields) -> CustomerRecord | None:
        """
        Set plain fields (phone, tier flags). Counters are never set here.

        Raises ConflictError when the new phone is already on file.
        """
        ...

    def redeem_one(self, customer_id: int) -> CustomerRecord | None:
        """
        Increment rewards_redeemed by one if a reward is eligible.

        The eligibility check (G5) and the increment run under the same lock.
        Returns None when the customer does not exist.

        Raises NoRewardAvailableError when nothing is eligible.
        """
        ...

    def delete_customer(self, customer_id: int) -> CustomerRecord | None:
        """Delete customer and drop-offs; return the snapshot taken before."""
        ...

    def search_customers(self, query: str) -> list[CustomerRecord]:
        """Substring match over first, last, email and "first last"; by last, first."""
        ...

    def list_customers(self, order_by: str) -> list[CustomerRecord]:
        """``order_by`` is "name" (last, first) or "created_at" (newest first)."""
        ...

    # Drop-offs

    def add_dropoff(
        self,
        customer_id: int,
        quantity: int,
        date: date,
        added_by: str,
    ) -> tuple[CustomerRecord, DropoffRecord] | None:
        """
        Append a drop-off and increment total_dropoffs as one atomic unit.

        Returns None (and writes nothing) when the customer does not exist.
        """
        ...

    def list_dropoffs(self, customer_id: int) -> list[DropoffRecord]:
        """Drop-offs by date descending, newest created first on ties."""
        ...

    # Staff

    def get_staff_by_pin(self, pin: str) -> StaffRecord | None:
        ...

    # Aggregates

    def count_customers(
        self,
        created_from: date | None = None,
        created_before: date | None = None,
    ) -> int:
        ...

    def sum_dropoff_quantity(self, date_from: date, date_before: date) -> int:
        ...

    def sum_customer_counters(self) -> tuple[int, int]:
        """(sum of total_dropoffs, sum of rewards_redeemed) over all customers."""
        ...
