"""Dropman services.

Plain functions over an injected RewardsStore:
- identity: registration resolution, phone lookups and updates
- ledger: drop-offs, flat rewards, tier claims
- customer: search, listings, history, deletion
- staff: PIN login
- stats: dashboard counters

dropman.service.RewardsService binds them to the configured store.
"""

from dropman.services import customer
from dropman.services import identity
from dropman.services import ledger
from dropman.services import staff
from dropman.services import stats

__all__ = ["customer", "identity", "ledger", "staff", "stats"]
