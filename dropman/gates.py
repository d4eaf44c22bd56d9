"""
Dropman Gates - Validation rules.

G1: PhoneFormat - Normalized phone has exactly PHONE_DIGITS digits
G2: PhoneUniqueness - Phone cannot belong to another Customer
G3: DropoffQuantity - Quantity is a positive integer that fits the column
G4: TierChoice - Tier is one of bronze, silver, gold
G5: RewardAvailability - At least one flat reward is eligible
"""

from dataclasses import dataclass

from dropman.conf import dropman_settings
from dropman.exceptions import (
    ConflictError,
    NoRewardAvailableError,
    ValidationError,
)
from dropman.protocols.rewards import CustomerRecord, RewardsStore, RewardTier

# PositiveIntegerField upper bound on every supported backend
MAX_DROPOFF_QUANTITY = 2147483647


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Dropman validation gates."""

    # =========================================================================
    # G1: Phone Format
    # =========================================================================

    @classmethod
    def phone_format(cls, phone_normalized: str) -> GateResult:
        """
        G1: Normalized phone must have exactly PHONE_DIGITS digits.

        Args:
            phone_normalized: Phone after normalize_phone()

        Raises:
            ValidationError: If the phone is empty, non-numeric or the wrong length
        """
        digits = dropman_settings.PHONE_DIGITS
        if not phone_normalized.isdigit() or len(phone_normalized) != digits:
            raise ValidationError(
                "INVALID_PHONE",
                message=f"Phone number must have exactly {digits} digits",
                phone=phone_normalized,
            )

        return GateResult(True, "G1_PhoneFormat")

    @classmethod
    def check_phone_format(cls, phone_normalized: str) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.phone_format(phone_normalized)
            return True
        except ValidationError:
            return False

    # =========================================================================
    # G2: Phone Uniqueness
    # =========================================================================

    @classmethod
    def phone_uniqueness(
        cls,
        store: RewardsStore,
        phone_normalized: str,
        exclude_customer_id: int | None = None,
    ) -> GateResult:
        """
        G2: Phone cannot belong to another Customer.

        Args:
            store: Rewards store to look the phone up in
            phone_normalized: Normalized phone
            exclude_customer_id: Customer allowed to own it (for updates)

        Raises:
            ConflictError: If the phone is on file for a different customer
        """
        existing = store.find_customer_by_phone(phone_normalized)
        if existing and existing.id != exclude_customer_id:
            raise ConflictError(
                "PHONE_CONFLICT",
                existing_customer_id=existing.id,
            )

        return GateResult(True, "G2_PhoneUniqueness")

    @classmethod
    def check_phone_uniqueness(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.phone_uniqueness(*args, **kwargs)
            return True
        except ConflictError:
            return False

    # =========================================================================
    # G3: Drop-off Quantity
    # =========================================================================

    @classmethod
    def dropoff_quantity(cls, quantity) -> GateResult:
        """
        G3: Quantity is a positive integer (booleans are not quantities)
        no larger than MAX_DROPOFF_QUANTITY.

        Raises:
            ValidationError: If quantity is not an int or is out of range
        """
        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, int)
            or not 0 < quantity <= MAX_DROPOFF_QUANTITY
        ):
            raise ValidationError(
                "INVALID_QUANTITY",
                quantity=quantity,
                max_quantity=MAX_DROPOFF_QUANTITY,
            )

        return GateResult(True, "G3_DropoffQuantity")

    @classmethod
    def check_dropoff_quantity(cls, quantity) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.dropoff_quantity(quantity)
            return True
        except ValidationError:
            return False

    # =========================================================================
    # G4: Tier Choice
    # =========================================================================

    @classmethod
    def tier_choice(cls, tier) -> GateResult:
        """
        G4: Tier must be one of RewardTier values.

        Raises:
            ValidationError: If tier is unknown
        """
        if tier not in RewardTier.values:
            raise ValidationError(
                "INVALID_TIER",
                tier=tier,
                allowed=list(RewardTier.values),
            )

        return GateResult(True, "G4_TierChoice")

    @classmethod
    def check_tier_choice(cls, tier) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.tier_choice(tier)
            return True
        except ValidationError:
            return False

    # =========================================================================
    # G5: Reward Availability
    # =========================================================================

    @classmethod
    def reward_availability(cls, customer: CustomerRecord) -> GateResult:
        """
        G5: At least one flat reward must be eligible.

        Raises:
            NoRewardAvailableError: If eligible rewards <= 0
        """
        from dropman.services.ledger import eligible_rewards

        available = eligible_rewards(customer)
        if available <= 0:
            raise NoRewardAvailableError(
                "NO_REWARD_AVAILABLE",
                customer_id=customer.id,
                eligible_rewards=available,
            )

        return GateResult(True, "G5_RewardAvailability")

    @classmethod
    def check_reward_availability(cls, customer: CustomerRecord) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.reward_availability(customer)
            return True
        except NoRewardAvailableError:
            return False
