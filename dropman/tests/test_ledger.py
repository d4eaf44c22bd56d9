"""Tests for the reward ledger (runs against both stores)."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from dropman.adapters.memory import InMemoryRewardsStore
from dropman.exceptions import NoRewardAvailableError, NotFoundError, ValidationError
from dropman.services import identity, ledger


@pytest.fixture
def ann(store):
    customer, _ = identity.resolve_or_create_customer(
        store, "Ann", "Lee", "a@x.com", "555-123-4567"
    )
    return customer


class TestEligibleRewards:
    @pytest.mark.parametrize(
        "total,redeemed,expected",
        [(0, 0, 0), (9, 0, 0), (10, 0, 1), (12, 1, 0), (35, 1, 2), (100, 10, 0)],
    )
    def test_formula(self, memory_store, total, redeemed, expected):
        customer = memory_store.create_customer("A", "B", "c@d.com", None, None)
        customer = memory_store.update_customer(
            customer.id, total_dropoffs=total, rewards_redeemed=redeemed
        )
        assert ledger.eligible_rewards(customer) == expected

    def test_reward_every_setting(self, memory_store, settings):
        settings.DROPMAN = {"REWARD_EVERY": 5}
        customer = memory_store.create_customer("A", "B", "c@d.com", None, None)
        customer, eligible = ledger.record_dropoff(memory_store, customer.id, 12, "2024-01-01")
        assert eligible == 2


class TestRecordDropoff:
    def test_scenario(self, store, ann):
        """Register, 7 + 5 units, redeem once."""
        assert ann.total_dropoffs == 0

        customer, eligible = ledger.record_dropoff(store, ann.id, 7, "2024-01-01")
        assert customer.total_dropoffs == 7
        assert eligible == 0

        customer, eligible = ledger.record_dropoff(store, ann.id, 5, "2024-01-02")
        assert customer.total_dropoffs == 12
        assert eligible == 1

        customer = ledger.redeem_reward(store, ann.id)
        assert customer.rewards_redeemed == 1
        assert ledger.eligible_rewards(customer) == 0

    def test_appends_fact(self, store, ann):
        ledger.record_dropoff(store, ann.id, 3, date(2024, 2, 1), staff_id="1157")

        [dropoff] = store.list_dropoffs(ann.id)
        assert dropoff.quantity == 3
        assert dropoff.date == date(2024, 2, 1)
        assert dropoff.added_by == "1157"

    def test_unknown_staff(self, store, ann):
        ledger.record_dropoff(store, ann.id, 3, "2024-02-01")
        assert store.list_dropoffs(ann.id)[0].added_by == "Unknown"

    def test_accepts_digit_strings_and_datetimes(self, store, ann):
        customer, _ = ledger.record_dropoff(
            store, str(ann.id), "4", datetime(2024, 3, 5, 14, 30)
        )
        assert customer.total_dropoffs == 4
        assert store.list_dropoffs(ann.id)[0].date == date(2024, 3, 5)

    def test_total_matches_sum_of_facts(self, store, ann):
        for quantity in (1, 9, 4, 6):
            ledger.record_dropoff(store, ann.id, quantity, "2024-01-01")

        total = sum(d.quantity for d in store.list_dropoffs(ann.id))
        assert store.get_customer(ann.id).total_dropoffs == total == 20

    @pytest.mark.parametrize(
        "quantity", [0, -3, 1.5, "abc", "", None, True, [1], 2**31, 10**20, str(10**20)]
    )
    def test_invalid_quantity(self, store, ann, quantity):
        with pytest.raises(ValidationError) as exc:
            ledger.record_dropoff(store, ann.id, quantity, "2024-01-01")
        assert exc.value.code == "INVALID_QUANTITY"
        assert store.list_dropoffs(ann.id) == []

    @pytest.mark.parametrize("day", [None, "", "yesterday", "2024-13-45", 20240101])
    def test_invalid_date(self, store, ann, day):
        with pytest.raises(ValidationError) as exc:
            ledger.record_dropoff(store, ann.id, 2, day)
        assert exc.value.code == "INVALID_DATE"
        assert store.get_customer(ann.id).total_dropoffs == 0

    def test_unknown_customer(self, store):
        with pytest.raises(NotFoundError):
            ledger.record_dropoff(store, 999, 2, "2024-01-01")
        assert store.sum_customer_counters() == (0, 0)

    @pytest.mark.parametrize("customer_id", [None, "", "abc", 0, -1])
    def test_invalid_customer_id(self, store, customer_id):
        with pytest.raises(ValidationError):
            ledger.record_dropoff(store, customer_id, 2, "2024-01-01")


class TestConcurrentDropoffs:
    def test_no_lost_updates(self, memory_store):
        """Concurrent drop-offs for one customer add up exactly."""
        customer = memory_store.create_customer("Ann", "Lee", "a@x.com", "5551234567", None)
        quantities = [q % 7 + 1 for q in range(200)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(
                pool.map(
                    lambda q: ledger.record_dropoff(memory_store, customer.id, q, "2024-01-01"),
                    quantities,
                )
            )

        assert memory_store.get_customer(customer.id).total_dropoffs == sum(quantities)
        assert len(memory_store.list_dropoffs(customer.id)) == len(quantities)


class TestRedeemReward:
    def test_no_reward(self, store, ann):
        ledger.record_dropoff(store, ann.id, 9, "2024-01-01")

        with pytest.raises(NoRewardAvailableError) as exc:
            ledger.redeem_reward(store, ann.id)

        assert exc.value.data["eligible_rewards"] == 0
        assert store.get_customer(ann.id).rewards_redeemed == 0

    def test_one_per_call(self, store, ann):
        ledger.record_dropoff(store, ann.id, 25, "2024-01-01")

        customer = ledger.redeem_reward(store, ann.id)
        assert customer.rewards_redeemed == 1
        assert ledger.eligible_rewards(customer) == 1

        customer = ledger.redeem_reward(store, ann.id)
        assert ledger.eligible_rewards(customer) == 0

        with pytest.raises(NoRewardAvailableError):
            ledger.redeem_reward(store, ann.id)
        assert store.get_customer(ann.id).rewards_redeemed == 2

    def test_unknown_customer(self, store):
        with pytest.raises(NotFoundError):
            ledger.redeem_reward(store, 999)


class TestSetTierClaimed:
    def test_tiers_are_independent(self, store, ann):
        ledger.set_tier_claimed(store, ann.id, "gold", True)
        customer = ledger.set_tier_claimed(store, ann.id, "bronze", True)
        assert customer.gold_claimed and customer.bronze_claimed
        assert not customer.silver_claimed

        customer = ledger.set_tier_claimed(store, ann.id, "gold", False)
        assert customer.gold_claimed is False
        assert customer.bronze_claimed is True

    def test_does_not_touch_flat_rewards(self, store, ann):
        ledger.record_dropoff(store, ann.id, 10, "2024-01-01")
        customer = ledger.set_tier_claimed(store, ann.id, "silver", True)

        assert customer.rewards_redeemed == 0
        assert ledger.eligible_rewards(customer) == 1
        assert customer.tier_claimed("silver") is True

    @pytest.mark.parametrize("tier", ["platinum", "", None, "Gold"])
    def test_invalid_tier(self, store, ann, tier):
        with pytest.raises(ValidationError) as exc:
            ledger.set_tier_claimed(store, ann.id, tier, True)
        assert exc.value.code == "INVALID_TIER"

    @pytest.mark.parametrize("claimed", ["true", 1, None])
    def test_claimed_must_be_bool(self, store, ann, claimed):
        with pytest.raises(ValidationError):
            ledger.set_tier_claimed(store, ann.id, "gold", claimed)
        assert store.get_customer(ann.id).gold_claimed is False

    def test_unknown_customer(self, store):
        with pytest.raises(NotFoundError):
            ledger.set_tier_claimed(store, 999, "gold", True)


class _LockstepStore(InMemoryRewardsStore):
    """Holds each thread after its first customer read until all threads have read."""

    def __init__(self, parties):
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=5)
        self._seen = threading.local()
        self.lockstep = False

    def get_customer(self, customer_id):
        customer = super().get_customer(customer_id)
        if self.lockstep and not getattr(self._seen, "read", False):
            self._seen.read = True
            self._barrier.wait()
        return customer


class TestConcurrentRedeem:
    def test_single_reward_redeemed_once(self):
        """Two desks redeeming the last reward at once: exactly one succeeds."""
        store = _LockstepStore(parties=2)
        customer = store.create_customer("Ann", "Lee", "a@x.com", "5551234567", None)
        ledger.record_dropoff(store, customer.id, 10, "2024-01-01")
        store.lockstep = True

        results = []

        def redeem():
            try:
                results.append(ledger.redeem_reward(store, customer.id))
            except NoRewardAvailableError as exc:
                results.append(exc)

        threads = [threading.Thread(target=redeem) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        store.lockstep = False

        redeemed = [r for r in results if not isinstance(r, NoRewardAvailableError)]
        refused = [r for r in results if isinstance(r, NoRewardAvailableError)]
        assert len(redeemed) == 1
        assert len(refused) == 1

        final = store.get_customer(customer.id)
        assert final.rewards_redeemed == 1
        assert ledger.eligible_rewards(final) == 0

    def test_store_rechecks_eligibility(self, store, ann):
        """A stale eligible read cannot push the balance below zero."""
        ledger.record_dropoff(store, ann.id, 10, "2024-01-01")
        store.redeem_one(ann.id)

        with pytest.raises(NoRewardAvailableError):
            store.redeem_one(ann.id)

        customer = store.get_customer(ann.id)
        assert customer.rewards_redeemed == 1
        assert ledger.eligible_rewards(customer) == 0

    def test_redeem_one_unknown_customer(self, store):
        assert store.redeem_one(999) is None
