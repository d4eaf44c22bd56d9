"""Reward ledger - drop-off totals, flat rewards and tier claims.

Two reward mechanisms coexist without cross-validation:
    Flat rewards: one per REWARD_EVERY cumulative units, net of
        rewards_redeemed. rewards_redeemed only ever increases.
    Tier claims: bronze/silver/gold flags toggled by staff. Thresholds
        are a front-desk convention and are not checked here.
"""

import logging
from datetime import date

from dropman.conf import dropman_settings
from dropman.exceptions import NotFoundError, ValidationError
from dropman.gates import Gates
from dropman.protocols.rewards import CustomerRecord, DropoffRecord, RewardsStore
from dropman.utils import coerce_date, coerce_id

logger = logging.getLogger(__name__)


def eligible_rewards(customer: CustomerRecord) -> int:
    """floor(total_dropoffs / REWARD_EVERY) - rewards_redeemed."""
    return customer.total_dropoffs // dropman_settings.REWARD_EVERY - customer.rewards_redeemed


def _coerce_quantity(quantity) -> int:
    if isinstance(quantity, str) and quantity.strip().isdigit():
        quantity = int(quantity)
    Gates.dropoff_quantity(quantity)
    return quantity


def _get_customer(store: RewardsStore, customer_id) -> CustomerRecord:
    customer_id = coerce_id(customer_id)
    customer = store.get_customer(customer_id)
    if customer is None:
        raise NotFoundError(customer_id=customer_id)
    return customer


def append_dropoff(
    store: RewardsStore,
    customer_id: int,
    quantity: int,
    date: date | str,
    staff_id: str | None = None,
) -> tuple[CustomerRecord, DropoffRecord, int]:
    """
    Record a drop-off and add its quantity to the customer's running total.

    The fact insert and the counter increment are applied by the store as
    one atomic unit.

    Args:
        store: Rewards store
        customer_id: Customer primary key
        quantity: Positive integer (digit strings accepted)
        date: Calendar date or ISO "YYYY-MM-DD"
        staff_id: Staff identifier stamped as added_by

    Returns:
        Tuple of (updated CustomerRecord, new DropoffRecord, eligible rewards)

    Raises:
        ValidationError: If quantity or date is invalid
        NotFoundError: If the customer does not exist
    """
    customer_id = coerce_id(customer_id)
    quantity = _coerce_quantity(quantity)
    day = coerce_date(date)
    if day is None:
        raise ValidationError("INVALID_DATE", date=date)

    added_by = str(staff_id).strip() if staff_id not in (None, "") else ""
    result = store.add_dropoff(
        customer_id,
        quantity,
        day,
        added_by or dropman_settings.UNKNOWN_STAFF,
    )
    if result is None:
        raise NotFoundError(customer_id=customer_id)

    customer, dropoff = result
    available = eligible_rewards(customer)
    logger.info(
        "Drop-off %s: customer %s +%s (total %s, eligible %s)",
        dropoff.id,
        customer.id,
        quantity,
        customer.total_dropoffs,
        available,
    )
    return customer, dropoff, available


def record_dropoff(
    store: RewardsStore,
    customer_id: int,
    quantity: int,
    date: date | str,
    staff_id: str | None = None,
) -> tuple[CustomerRecord, int]:
    """Record a drop-off. Returns (updated CustomerRecord, eligible rewards)."""
    customer, _, available = append_dropoff(store, customer_id, quantity, date, staff_id)
    return customer, available


def redeem_reward(store: RewardsStore, customer_id: int) -> CustomerRecord:
    """
    Redeem exactly one flat reward.

    Raises:
        NotFoundError: If the customer does not exist
        NoRewardAvailableError: If no reward is eligible
    """
    customer = _get_customer(store, customer_id)
    Gates.reward_availability(customer)

    # Re-checked by the store under its lock
    customer = store.redeem_one(customer.id)
    if customer is None:
        raise NotFoundError(customer_id=customer_id)
    logger.info(
        "Customer %s redeemed a reward (%s redeemed)", customer.id, customer.rewards_redeemed
    )
    return customer


def set_tier_claimed(
    store: RewardsStore,
    customer_id: int,
    tier: str,
    claimed: bool,
) -> CustomerRecord:
    """
    Set one tier's claimed flag; the other tiers and the flat counter are untouched.

    Raises:
        ValidationError: If tier is unknown or claimed is not a bool
        NotFoundError: If the customer does not exist
    """
    Gates.tier_choice(tier)
    if not isinstance(claimed, bool):
        raise ValidationError(message="claimed must be true or false", claimed=claimed)

    customer = _get_customer(store, customer_id)
    customer = store.update_customer(customer.id, **{f"{tier}_claimed": claimed})
    if customer is None:
        raise NotFoundError(customer_id=customer_id)
    logger.info("Customer %s %s tier claimed=%s", customer.id, tier, claimed)
    return customer
