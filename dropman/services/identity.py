"""Identity resolver - returning customer or new registration.

Resolution order at registration (first match wins):
    1. Exact normalized phone.
    2. Case-insensitive (first_name, last_name, email). A match without a
       phone on file gets the registration phone backfilled.
    3. New customer.

Phone is the primary key for dedup; the name+email fallback covers
customers registered before phone collection was mandatory. Email alone
never identifies a customer.
"""

import logging

from dropman.exceptions import ConflictError, NotFoundError, ValidationError
from dropman.gates import Gates
from dropman.protocols.rewards import CustomerRecord, RewardsStore
from dropman.utils import coerce_id, normalize_phone

logger = logging.getLogger(__name__)


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


def _phone_owner(store: RewardsStore, conflict: ConflictError) -> CustomerRecord:
    customer = store.get_customer(conflict.data["existing_customer_id"])
    if customer is None:
        raise conflict
    logger.info("Registration resolved to customer %s after phone conflict", customer.id)
    return customer


def clean_phone(phone: str | None) -> str:
    """Normalize a phone and run G1. Returns the digits."""
    phone_normalized = normalize_phone(phone)
    Gates.phone_format(phone_normalized)
    return phone_normalized


def resolve_or_create_customer(
    store: RewardsStore,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    referred_by: str | None = None,
) -> tuple[CustomerRecord, bool]:
    """
    Find the returning customer for a registration, or create one.

    Args:
        store: Rewards store
        first_name, last_name, email, phone: Required registration fields
        referred_by: Optional referrer, persisted on new customers only

    Returns:
        Tuple of (CustomerRecord, is_new: bool)

    Raises:
        ValidationError: If a required field is missing or the phone is malformed
    """
    fields = {
        "first_name": _text(first_name),
        "last_name": _text(last_name),
        "email": _text(email),
        "phone": _text(phone),
    }
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError("MISSING_FIELDS", missing=missing)

    phone_normalized = clean_phone(fields["phone"])

    customer = store.find_customer_by_phone(phone_normalized)
    if customer:
        logger.debug("Registration matched customer %s by phone", customer.id)
        return customer, False

    customer = store.find_customer_by_identity(
        fields["first_name"], fields["last_name"], fields["email"]
    )
    if customer:
        if not customer.phone:
            try:
                customer = store.update_customer(customer.id, phone=phone_normalized)
            except ConflictError as exc:
                return _phone_owner(store, exc), False
            logger.info("Backfilled phone on customer %s", customer.id)
        return customer, False

    try:
        customer = store.create_customer(
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            email=fields["email"].lower(),
            phone=phone_normalized,
            referred_by=_text(referred_by) or None,
        )
    except ConflictError as exc:
        # A concurrent registration took the phone between lookup and insert
        return _phone_owner(store, exc), False
    logger.info("Registered new customer %s", customer.id)
    return customer, True


def find_by_phone(store: RewardsStore, phone: str) -> CustomerRecord:
    """
    Get customer by phone (exact match on the normalized digits).

    Raises:
        ValidationError: If the phone is malformed
        NotFoundError: If no customer has this phone
    """
    phone_normalized = clean_phone(phone)
    customer = store.find_customer_by_phone(phone_normalized)
    if customer is None:
        raise NotFoundError(phone=phone_normalized)
    return customer


def update_phone(store: RewardsStore, customer_id: int, phone: str) -> CustomerRecord:
    """
    Replace a customer's phone.

    Raises:
        ValidationError: If the phone is malformed
        NotFoundError: If the customer does not exist
        ConflictError: If the phone belongs to a different customer
    """
    phone_normalized = clean_phone(phone)
    customer_id = coerce_id(customer_id)
    customer = store.get_customer(customer_id)
    if customer is None:
        raise NotFoundError(customer_id=customer_id)

    if customer.phone == phone_normalized:
        return customer

    try:
        Gates.phone_uniqueness(store, phone_normalized, exclude_customer_id=customer.id)
    except ConflictError as exc:
        logger.warning(
            "Phone update for customer %s rejected: phone on file for customer %s",
            customer.id,
            exc.data.get("existing_customer_id"),
        )
        raise
    return store.update_customer(customer.id, phone=phone_normalized)
