"""
Django Dropman - Recycling drop-off rewards.

Usage:
    from dropman import RewardsService
    from dropman.gates import Gates, GateResult

    customer, is_new = RewardsService.register("Ann", "Lee", "a@x.com", "555-123-4567")
    customer, eligible = RewardsService.record_dropoff(customer.id, 7, "2024-01-01")
    customer = RewardsService.redeem_reward(customer.id)

    # Gates validation
    Gates.phone_format("5551234567")
    Gates.tier_choice("gold")
"""


def __getattr__(name):
    if name == "RewardsService":
        from dropman.service import RewardsService

        return RewardsService
    if name == "Gates":
        from dropman.gates import Gates

        return Gates
    if name == "GateResult":
        from dropman.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RewardsService", "Gates", "GateResult"]
__version__ = "0.3.0"
