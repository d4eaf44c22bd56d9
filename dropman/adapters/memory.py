"""In-memory RewardsStore adapter."""

import itertools
import threading
from dataclasses import replace
from datetime import date

from django.utils import timezone

from dropman.exceptions import ConflictError
from dropman.gates import Gates
from dropman.protocols.rewards import CustomerRecord, DropoffRecord, StaffRecord

DEFAULT_STAFF = [
    ("1157", "Staff Member 1"),
    ("5600", "Staff Member 2"),
    ("0725", "Staff Member 3"),
]


def _name_key(customer: CustomerRecord):
    return (customer.last_name.lower(), customer.first_name.lower(), customer.id)


class InMemoryRewardsStore:
    """
    RewardsStore kept in process memory.

    Used by tests and for running the resolver/ledger without a database.
    Every mutation holds one lock, which gives add_dropoff the same
    all-or-nothing behavior as the ORM transaction.

    Configuration in settings.py:
        DROPMAN = {
            "STORE_BACKEND": "dropman.adapters.memory.InMemoryRewardsStore",
        }
    """

    def __init__(self, staff: list[tuple[str, str]] | None = None):
        self._lock = threading.Lock()
        self._customers: dict[int, CustomerRecord] = {}
        self._dropoffs: dict[int, DropoffRecord] = {}
        self._customer_ids = itertools.count(1)
        self._dropoff_ids = itertools.count(1)
        self._staff = {
            pin: StaffRecord(id=i, name=name)
            for i, (pin, name) in enumerate(staff if staff is not None else DEFAULT_STAFF, start=1)
        }

    # Customers

    def get_customer(self, customer_id: int) -> CustomerRecord | None:
        return self._customers.get(customer_id)

    def find_customer_by_phone(self, phone: str) -> CustomerRecord | None:
        for customer in self._by_id():
            if customer.phone and customer.phone == phone:
                return customer
        return None

    def find_customer_by_identity(
        self,
        first_name: str,
        last_name: str,
        email: str,
    ) -> CustomerRecord | None:
        wanted = (first_name.lower(), last_name.lower(), email.lower())
        for customer in self._by_id():
            if (
                customer.first_name.lower(),
                customer.last_name.lower(),
                customer.email.lower(),
            ) == wanted:
                return customer
        return None

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str | None,
        referred_by: str | None,
    ) -> CustomerRecord:
        with self._lock:
            self._check_phone_free(phone)
            now = timezone.now()
            customer = CustomerRecord(
                id=next(self._customer_ids),
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone=phone or None,
                referred_by=referred_by or None,
                total_dropoffs=0,
                rewards_redeemed=0,
                bronze_claimed=False,
                silver_claimed=False,
                gold_claimed=False,
                created_at=now,
                updated_at=now,
            )
            self._customers[customer.id] = customer
        return customer

    def update_customer(self, customer_id: int, **fields) -> CustomerRecord | None:
        with self._lock:
            customer = self._customers.get(customer_id)
            if customer is None:
                return None
            if fields.get("phone"):
                self._check_phone_free(fields["phone"], exclude_customer_id=customer_id)
            customer = replace(customer, updated_at=timezone.now(), **fields)
            self._customers[customer_id] = customer
        return customer

    def redeem_one(self, customer_id: int) -> CustomerRecord | None:
        with self._lock:
            customer = self._customers.get(customer_id)
            if customer is None:
                return None
            Gates.reward_availability(customer)
            customer = replace(
                customer,
                rewards_redeemed=customer.rewards_redeemed + 1,
                updated_at=timezone.now(),
            )
            self._customers[customer_id] = customer
        return customer

    def delete_customer(self, customer_id: int) -> CustomerRecord | None:
        with self._lock:
            customer = self._customers.pop(customer_id, None)
            if customer is None:
                return None
            self._dropoffs = {
                pk: d for pk, d in self._dropoffs.items() if d.customer_id != customer_id
            }
        return customer

    def search_customers(self, query: str) -> list[CustomerRecord]:
        needle = query.lower()
        matches = [
            c
            for c in self._customers.values()
            if needle in c.first_name.lower()
            or needle in c.last_name.lower()
            or needle in c.email.lower()
            or needle in f"{c.first_name} {c.last_name}".lower()
        ]
        return sorted(matches, key=_name_key)

    def list_customers(self, order_by: str) -> list[CustomerRecord]:
        customers = list(self._customers.values())
        if order_by == "created_at":
            return sorted(customers, key=lambda c: (c.created_at, c.id), reverse=True)
        return sorted(customers, key=_name_key)

    # Drop-offs

    def add_dropoff(
        self,
        customer_id: int,
        quantity: int,
        date: date,
        added_by: str,
    ) -> tuple[CustomerRecord, DropoffRecord] | None:
        with self._lock:
            customer = self._customers.get(customer_id)
            if customer is None:
                return None
            now = timezone.now()
            dropoff = DropoffRecord(
                id=next(self._dropoff_ids),
                customer_id=customer_id,
                quantity=quantity,
                date=date,
                added_by=added_by,
                created_at=now,
            )
            customer = replace(
                customer,
                total_dropoffs=customer.total_dropoffs + quantity,
                updated_at=now,
            )
            self._dropoffs[dropoff.id] = dropoff
            self._customers[customer_id] = customer
        return customer, dropoff

    def list_dropoffs(self, customer_id: int) -> list[DropoffRecord]:
        dropoffs = [d for d in self._dropoffs.values() if d.customer_id == customer_id]
        return sorted(dropoffs, key=lambda d: (d.date, d.created_at, d.id), reverse=True)

    # Staff

    def get_staff_by_pin(self, pin: str) -> StaffRecord | None:
        return self._staff.get(pin)

    # Aggregates

    def count_customers(
        self,
        created_from: date | None = None,
        created_before: date | None = None,
    ) -> int:
        count = 0
        for customer in self._customers.values():
            created = timezone.localdate(customer.created_at)
            if created_from and created < created_from:
                continue
            if created_before and created >= created_before:
                continue
            count += 1
        return count

    def sum_dropoff_quantity(self, date_from: date, date_before: date) -> int:
        return sum(
            d.quantity for d in self._dropoffs.values() if date_from <= d.date < date_before
        )

    def sum_customer_counters(self) -> tuple[int, int]:
        customers = list(self._customers.values())
        return (
            sum(c.total_dropoffs for c in customers),
            sum(c.rewards_redeemed for c in customers),
        )

    def _by_id(self) -> list[CustomerRecord]:
        return sorted(self._customers.values(), key=lambda c: c.id)

    def _check_phone_free(self, phone: str | None, exclude_customer_id: int | None = None):
        """Caller holds the lock."""
        if not phone:
            return
        for customer in self._by_id():
            if customer.phone == phone and customer.id != exclude_customer_id:
                raise ConflictError("PHONE_CONFLICT", existing_customer_id=customer.id)
