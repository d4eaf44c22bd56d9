"""Django ORM RewardsStore adapter."""

import logging
from contextlib import contextmanager
from datetime import date

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Q, Sum, Value
from django.db.models.functions import Concat, Lower
from django.utils import timezone

from dropman.exceptions import ConflictError, StoreError
from dropman.gates import Gates
from dropman.models import Customer, Dropoff, Staff
from dropman.protocols.rewards import CustomerRecord, DropoffRecord, StaffRecord

logger = logging.getLogger(__name__)

_ORDERINGS = {
    "name": (Lower("last_name"), Lower("first_name"), "id"),
    "created_at": ("-created_at", "-id"),
}


@contextmanager
def _store_errors(operation: str):
    """Wrap database failures in StoreError, keeping the original as __cause__."""
    try:
        yield
    except (DatabaseError, OverflowError) as exc:
        logger.error("Rewards store: %s failed - %s", operation, exc)
        raise StoreError(message=f"{operation} failed: {exc}", operation=operation) from exc


def _customer_record(customer: Customer) -> CustomerRecord:
    return CustomerRecord(
        id=customer.pk,
        first_name=customer.first_name,
        last_name=customer.last_name,
        email=customer.email,
        phone=customer.phone or None,
        referred_by=customer.referred_by or None,
        total_dropoffs=customer.total_dropoffs,
        rewards_redeemed=customer.rewards_redeemed,
        bronze_claimed=customer.bronze_claimed,
        silver_claimed=customer.silver_claimed,
        gold_claimed=customer.gold_claimed,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


def _dropoff_record(dropoff: Dropoff) -> DropoffRecord:
    return DropoffRecord(
        id=dropoff.pk,
        customer_id=dropoff.customer_id,
        quantity=dropoff.quantity,
        date=dropoff.date,
        added_by=dropoff.added_by,
        created_at=dropoff.created_at,
    )


class DjangoRewardsStore:
    """
    RewardsStore backed by the Dropman models.

    Counters are incremented with F() expressions inside UPDATE statements,
    so concurrent requests serialize on the row lock instead of overwriting
    each other with values read earlier.
    """

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def get_customer(self, customer_id: int) -> CustomerRecord | None:
        with _store_errors("get_customer"):
            customer = Customer.objects.filter(pk=customer_id).first()
        return _customer_record(customer) if customer else None

    def find_customer_by_phone(self, phone: str) -> CustomerRecord | None:
        with _store_errors("find_customer_by_phone"):
            customer = Customer.objects.filter(phone=phone).order_by("id").first()
        return _customer_record(customer) if customer else None

    def find_customer_by_identity(
        self,
        first_name: str,
        last_name: str,
        email: str,
    ) -> CustomerRecord | None:
        with _store_errors("find_customer_by_identity"):
            customer = (
                Customer.objects.filter(
                    first_name__iexact=first_name,
                    last_name__iexact=last_name,
                    email__iexact=email,
                )
                .order_by("id")
                .first()
            )
        return _customer_record(customer) if customer else None

    def create_customer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str | None,
        referred_by: str | None,
    ) -> CustomerRecord:
        with _store_errors("create_customer"):
            try:
                with transaction.atomic():
                    customer = Customer.objects.create(
                        first_name=first_name,
                        last_name=last_name,
                        email=email,
                        phone=phone or "",
                        referred_by=referred_by or "",
                    )
            except IntegrityError as exc:
                conflict = self._phone_conflict(phone)
                if conflict is None:
                    raise
                raise conflict from exc
        return _customer_record(customer)

    def update_customer(self, customer_id: int, **fields) -> CustomerRecord | None:
        if "phone" in fields:
            fields["phone"] = fields["phone"] or ""
        with _store_errors("update_customer"):
            try:
                with transaction.atomic():
                    updated = Customer.objects.filter(pk=customer_id).update(
                        updated_at=timezone.now(), **fields
                    )
            except IntegrityError as exc:
                conflict = self._phone_conflict(fields.get("phone"))
                if conflict is None:
                    raise
                raise conflict from exc
            if not updated:
                return None
            return _customer_record(Customer.objects.get(pk=customer_id))

    def redeem_one(self, customer_id: int) -> CustomerRecord | None:
        with _store_errors("redeem_one"), transaction.atomic():
            customer = Customer.objects.select_for_update().filter(pk=customer_id).first()
            if customer is None:
                return None
            Gates.reward_availability(_customer_record(customer))
            Customer.objects.filter(pk=customer_id).update(
                rewards_redeemed=F("rewards_redeemed") + 1,
                updated_at=timezone.now(),
            )
            customer.refresh_from_db()
        return _customer_record(customer)

    def _phone_conflict(self, phone: str | None) -> ConflictError | None:
        """ConflictError naming the current owner of ``phone``, if there is one."""
        existing = Customer.objects.filter(phone=phone).order_by("id").first() if phone else None
        if existing is None:
            return None
        logger.info("Phone %s already on file for customer %s", phone, existing.pk)
        return ConflictError("PHONE_CONFLICT", existing_customer_id=existing.pk)

    def delete_customer(self, customer_id: int) -> CustomerRecord | None:
        with _store_errors("delete_customer"), transaction.atomic():
            customer = Customer.objects.select_for_update().filter(pk=customer_id).first()
            if customer is None:
                return None
            snapshot = _customer_record(customer)
            customer.delete()
        return snapshot

    def search_customers(self, query: str) -> list[CustomerRecord]:
        with _store_errors("search_customers"):
            qs = (
                Customer.objects.annotate(
                    full_name=Concat("first_name", Value(" "), "last_name")
                )
                .filter(
                    Q(first_name__icontains=query)
                    | Q(last_name__icontains=query)
                    | Q(email__icontains=query)
                    | Q(full_name__icontains=query)
                )
                .order_by(*_ORDERINGS["name"])
            )
            return [_customer_record(c) for c in qs]

    def list_customers(self, order_by: str) -> list[CustomerRecord]:
        with _store_errors("list_customers"):
            qs = Customer.objects.order_by(*_ORDERINGS[order_by])
            return [_customer_record(c) for c in qs]

    # ------------------------------------------------------------------
    # Drop-offs
    # ------------------------------------------------------------------

    def add_dropoff(
        self,
        customer_id: int,
        quantity: int,
        date: date,
        added_by: str,
    ) -> tuple[CustomerRecord, DropoffRecord] | None:
        with _store_errors("add_dropoff"), transaction.atomic():
            # The UPDATE takes the row lock first; concurrent drop-offs for the
            # same customer queue here until this transaction commits.
            updated = Customer.objects.filter(pk=customer_id).update(
                total_dropoffs=F("total_dropoffs") + quantity,
                updated_at=timezone.now(),
            )
            if not updated:
                return None
            dropoff = Dropoff.objects.create(
                customer_id=customer_id,
                quantity=quantity,
                date=date,
                added_by=added_by,
            )
            customer = Customer.objects.get(pk=customer_id)
        return _customer_record(customer), _dropoff_record(dropoff)

    def list_dropoffs(self, customer_id: int) -> list[DropoffRecord]:
        with _store_errors("list_dropoffs"):
            qs = Dropoff.objects.filter(customer_id=customer_id).order_by(
                "-date", "-created_at", "-id"
            )
            return [_dropoff_record(d) for d in qs]

    # ------------------------------------------------------------------
    # Staff
    # ------------------------------------------------------------------

    def get_staff_by_pin(self, pin: str) -> StaffRecord | None:
        with _store_errors("get_staff_by_pin"):
            staff = Staff.objects.filter(pin=pin, is_active=True).first()
        return StaffRecord(id=staff.pk, name=staff.name) if staff else None

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count_customers(
        self,
        created_from: date | None = None,
        created_before: date | None = None,
    ) -> int:
        qs = Customer.objects.all()
        if created_from:
            qs = qs.filter(created_at__date__gte=created_from)
        if created_before:
            qs = qs.filter(created_at__date__lt=created_before)
        with _store_errors("count_customers"):
            return qs.count()

    def sum_dropoff_quantity(self, date_from: date, date_before: date) -> int:
        with _store_errors("sum_dropoff_quantity"):
            total = Dropoff.objects.filter(
                date__gte=date_from, date__lt=date_before
            ).aggregate(total=Sum("quantity"))["total"]
        return total or 0

    def sum_customer_counters(self) -> tuple[int, int]:
        with _store_errors("sum_customer_counters"):
            totals = Customer.objects.aggregate(
                dropoffs=Sum("total_dropoffs"),
                redeemed=Sum("rewards_redeemed"),
            )
        return totals["dropoffs"] or 0, totals["redeemed"] or 0
