"""
Dropman signals - public event API.

Emitted signals (all sent by RewardsService, sender=RewardsService):
- customer_registered: customer=CustomerRecord, is_new=bool
- dropoff_recorded: customer=CustomerRecord, dropoff=DropoffRecord, eligible_rewards=int
- reward_redeemed: customer=CustomerRecord
- customer_deleted: customer=CustomerRecord (snapshot)
"""

from django.dispatch import Signal

customer_registered = Signal()
dropoff_recorded = Signal()
reward_redeemed = Signal()
customer_deleted = Signal()
