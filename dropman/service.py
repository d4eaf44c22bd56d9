"""
Dropman public API.

REGISTRATION:
    RewardsService.register(...)          - Resolve returning customer or create
    RewardsService.find_by_phone(phone)   - Lookup by normalized phone
    RewardsService.update_phone(id, phone)

LEDGER:
    RewardsService.record_dropoff(...)    - Append drop-off, bump running total
    RewardsService.redeem_reward(id)      - Redeem one flat reward
    RewardsService.set_tier_claimed(...)  - Toggle bronze/silver/gold

STAFF DASHBOARD:
    RewardsService.search(query)
    RewardsService.list_customers(order_by)
    RewardsService.get_with_history(id)
    RewardsService.delete_customer(id)
    RewardsService.staff_login(pin)
    RewardsService.compute_stats(month)
"""

from datetime import date

from django.utils.module_loading import import_string

from dropman.conf import dropman_settings
from dropman.protocols.rewards import (
    CustomerHistory,
    CustomerRecord,
    RewardsStore,
    StaffRecord,
    StatsSummary,
)
from dropman.services import customer as customer_service
from dropman.services import identity, ledger, stats
from dropman.services import staff as staff_service
from dropman.signals import (
    customer_deleted,
    customer_registered,
    dropoff_recorded,
    reward_redeemed,
)

_stores: dict[str, RewardsStore] = {}


def get_store() -> RewardsStore:
    """Return the configured RewardsStore (one instance per backend path)."""
    backend_path = dropman_settings.STORE_BACKEND
    if backend_path not in _stores:
        backend_class = import_string(backend_path)
        _stores[backend_path] = backend_class()
    return _stores[backend_path]


class RewardsService:
    """
    Dropman public API.

    Uses @classmethod for extensibility. Every call resolves the store via
    _get_store(); override it to inject a different store.
    """

    @classmethod
    def _get_store(cls) -> RewardsStore:
        return get_store()

    # ======================================================================
    # Registration
    # ======================================================================

    @classmethod
    def register(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        referred_by: str | None = None,
    ) -> tuple[CustomerRecord, bool]:
        """
        Register a customer, or recognize a returning one.

        Returns:
            Tuple of (CustomerRecord, is_new: bool)
        """
        customer, is_new = identity.resolve_or_create_customer(
            cls._get_store(), first_name, last_name, email, phone, referred_by
        )
        customer_registered.send(sender=cls, customer=customer, is_new=is_new)
        return customer, is_new

    @classmethod
    def find_by_phone(cls, phone: str) -> CustomerRecord:
        return identity.find_by_phone(cls._get_store(), phone)

    @classmethod
    def update_phone(cls, customer_id: int, phone: str) -> CustomerRecord:
        return identity.update_phone(cls._get_store(), customer_id, phone)

    # ======================================================================
    # Ledger
    # ======================================================================

    @classmethod
    def record_dropoff(
        cls,
        customer_id: int,
        quantity: int,
        date: date | str,
        staff_id: str | None = None,
    ) -> tuple[CustomerRecord, int]:
        """
        Record a drop-off.

        Returns:
            Tuple of (updated CustomerRecord, eligible rewards)
        """
        customer, dropoff, available = ledger.append_dropoff(
            cls._get_store(), customer_id, quantity, date, staff_id
        )
        dropoff_recorded.send(
            sender=cls,
            customer=customer,
            dropoff=dropoff,
            eligible_rewards=available,
        )
        return customer, available

    @classmethod
    def redeem_reward(cls, customer_id: int) -> CustomerRecord:
        customer = ledger.redeem_reward(cls._get_store(), customer_id)
        reward_redeemed.send(sender=cls, customer=customer)
        return customer

    @classmethod
    def set_tier_claimed(cls, customer_id: int, tier: str, claimed: bool) -> CustomerRecord:
        return ledger.set_tier_claimed(cls._get_store(), customer_id, tier, claimed)

    @classmethod
    def eligible_rewards(cls, customer: CustomerRecord) -> int:
        return ledger.eligible_rewards(customer)

    # ======================================================================
    # Staff dashboard
    # ======================================================================

    @classmethod
    def get(cls, customer_id: int) -> CustomerRecord:
        return customer_service.get(cls._get_store(), customer_id)

    @classmethod
    def search(cls, query: str) -> list[CustomerRecord]:
        return customer_service.search(cls._get_store(), query)

    @classmethod
    def list_customers(cls, order_by: str = "name") -> list[CustomerRecord]:
        return customer_service.list_customers(cls._get_store(), order_by)

    @classmethod
    def get_with_history(cls, customer_id: int) -> CustomerHistory:
        return customer_service.get_with_history(cls._get_store(), customer_id)

    @classmethod
    def delete_customer(cls, customer_id: int) -> CustomerRecord:
        snapshot = customer_service.delete(cls._get_store(), customer_id)
        customer_deleted.send(sender=cls, customer=snapshot)
        return snapshot

    @classmethod
    def staff_login(cls, pin: str) -> StaffRecord:
        return staff_service.login(cls._get_store(), pin)

    @classmethod
    def compute_stats(cls, as_of_month=None) -> StatsSummary:
        return stats.compute_stats(cls._get_store(), as_of_month)
