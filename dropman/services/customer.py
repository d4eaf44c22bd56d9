"""Customer service - lookups, listings, history and deletion."""

import logging

from dropman.exceptions import NotFoundError, ValidationError
from dropman.protocols.rewards import CustomerHistory, CustomerRecord, RewardsStore
from dropman.services.ledger import eligible_rewards
from dropman.utils import coerce_id

logger = logging.getLogger(__name__)

ORDERINGS = {
    "name": "name",
    "createdAt": "created_at",
    "created_at": "created_at",
}


def get(store: RewardsStore, customer_id: int) -> CustomerRecord:
    """Get customer by primary key or raise NotFoundError."""
    customer_id = coerce_id(customer_id)
    customer = store.get_customer(customer_id)
    if customer is None:
        raise NotFoundError(customer_id=customer_id)
    return customer


def search(store: RewardsStore, query: str) -> list[CustomerRecord]:
    """Search customers by first name, last name, email or full name."""
    query = (query or "").strip()
    if not query:
        raise ValidationError(message="Search query is required")
    return store.search_customers(query)


def list_customers(store: RewardsStore, order_by: str = "name") -> list[CustomerRecord]:
    """List all customers by name (last, first) or by registration, newest first."""
    try:
        ordering = ORDERINGS[order_by]
    except (KeyError, TypeError):
        raise ValidationError(
            "INVALID_ORDERING",
            order_by=order_by,
            allowed=["name", "createdAt"],
        )
    return store.list_customers(ordering)


def get_with_history(store: RewardsStore, customer_id: int) -> CustomerHistory:
    """Customer plus drop-offs, most recent date first."""
    customer = get(store, customer_id)
    return CustomerHistory(
        customer=customer,
        eligible_rewards=eligible_rewards(customer),
        dropoffs=store.list_dropoffs(customer.id),
    )


def delete(store: RewardsStore, customer_id: int) -> CustomerRecord:
    """Delete customer and its drop-offs. Returns the deleted snapshot."""
    customer_id = coerce_id(customer_id)
    snapshot = store.delete_customer(customer_id)
    if snapshot is None:
        raise NotFoundError(customer_id=customer_id)
    logger.info("Deleted customer %s (%s)", snapshot.id, snapshot.name)
    return snapshot
