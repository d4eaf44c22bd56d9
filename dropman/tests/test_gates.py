"""Tests for Dropman gates."""

import pytest

from dropman.exceptions import ConflictError, NoRewardAvailableError, ValidationError
from dropman.gates import MAX_DROPOFF_QUANTITY, Gates


class TestPhoneFormat:
    """G1: normalized phone has exactly ten digits."""

    def test_valid(self):
        result = Gates.phone_format("5551234567")
        assert result.passed is True
        assert result.gate_name == "G1_PhoneFormat"

    @pytest.mark.parametrize("phone", ["", "555123456", "55512345678", "555-123-456"])
    def test_invalid(self, phone):
        with pytest.raises(ValidationError) as exc:
            Gates.phone_format(phone)
        assert exc.value.code == "INVALID_PHONE"
        assert not Gates.check_phone_format(phone)

    def test_digit_count_setting(self, settings):
        settings.DROPMAN = {"PHONE_DIGITS": 11}
        assert Gates.check_phone_format("15551234567")
        assert not Gates.check_phone_format("5551234567")


class TestPhoneUniqueness:
    """G2: phone cannot belong to another customer."""

    def test_free_phone(self, memory_store):
        assert Gates.check_phone_uniqueness(memory_store, "5551234567")

    def test_taken_phone(self, memory_store):
        owner = memory_store.create_customer("Ann", "Lee", "a@x.com", "5551234567", None)

        with pytest.raises(ConflictError) as exc:
            Gates.phone_uniqueness(memory_store, "5551234567")

        assert exc.value.data["existing_customer_id"] == owner.id

    def test_owner_excluded(self, memory_store):
        owner = memory_store.create_customer("Ann", "Lee", "a@x.com", "5551234567", None)
        assert Gates.check_phone_uniqueness(
            memory_store, "5551234567", exclude_customer_id=owner.id
        )


class TestDropoffQuantity:
    """G3: quantity is a positive integer."""

    @pytest.mark.parametrize("quantity", [1, 7, 500])
    def test_valid(self, quantity):
        assert Gates.check_dropoff_quantity(quantity)

    @pytest.mark.parametrize("quantity", [0, -1, 2.0, "3", None, True, False])
    def test_invalid(self, quantity):
        assert not Gates.check_dropoff_quantity(quantity)

    def test_upper_bound(self):
        assert Gates.check_dropoff_quantity(MAX_DROPOFF_QUANTITY)
        assert not Gates.check_dropoff_quantity(MAX_DROPOFF_QUANTITY + 1)

    def test_oversized_reports_bound(self):
        with pytest.raises(ValidationError) as exc:
            Gates.dropoff_quantity(10**20)
        assert exc.value.code == "INVALID_QUANTITY"
        assert exc.value.data["max_quantity"] == MAX_DROPOFF_QUANTITY


class TestTierChoice:
    """G4: tier is bronze, silver or gold."""

    @pytest.mark.parametrize("tier", ["bronze", "silver", "gold"])
    def test_valid(self, tier):
        assert Gates.check_tier_choice(tier)

    def test_invalid(self):
        with pytest.raises(ValidationError) as exc:
            Gates.tier_choice("platinum")
        assert exc.value.data["allowed"] == ["bronze", "silver", "gold"]


class TestRewardAvailability:
    """G5: at least one flat reward is eligible."""

    def test_available(self, memory_store):
        customer = memory_store.create_customer("Ann", "Lee", "a@x.com", None, None)
        customer = memory_store.update_customer(customer.id, total_dropoffs=10)
        assert Gates.check_reward_availability(customer)

    def test_all_redeemed(self, memory_store):
        customer = memory_store.create_customer("Ann", "Lee", "a@x.com", None, None)
        customer = memory_store.update_customer(
            customer.id, total_dropoffs=25, rewards_redeemed=2
        )

        with pytest.raises(NoRewardAvailableError) as exc:
            Gates.reward_availability(customer)

        assert exc.value.data == {"customer_id": customer.id, "eligible_rewards": 0}
