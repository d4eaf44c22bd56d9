"""Pytest fixtures for Dropman tests."""

from datetime import date

import pytest

from dropman.adapters.django_store import DjangoRewardsStore
from dropman.adapters.memory import InMemoryRewardsStore
from dropman.models import Customer, Dropoff


@pytest.fixture
def memory_store():
    """Fresh in-memory store with the default staff seed."""
    return InMemoryRewardsStore()


@pytest.fixture
def django_store(db):
    """ORM-backed store (staff seeded by migration 0002)."""
    return DjangoRewardsStore()


@pytest.fixture(params=["memory", "django"])
def store(request):
    """Run the test against both store implementations."""
    if request.param == "django":
        return request.getfixturevalue("django_store")
    return request.getfixturevalue("memory_store")


@pytest.fixture(autouse=True)
def _reset_store_cache():
    """RewardsService caches one store per backend path."""
    from dropman import service

    service._stores.clear()
    yield
    service._stores.clear()


@pytest.fixture
def customer(db):
    """Create a test customer."""
    return Customer.objects.create(
        first_name="Ann",
        last_name="Lee",
        email="a@x.com",
        phone="5551234567",
    )


@pytest.fixture
def customer_no_phone(db):
    """Customer registered before phone collection was mandatory."""
    return Customer.objects.create(
        first_name="Bob",
        last_name="Stone",
        email="bob@example.com",
    )


@pytest.fixture
def customer_with_dropoffs(customer):
    """Customer with two drop-offs totalling 12."""
    Dropoff.objects.create(customer=customer, quantity=7, date=date(2024, 1, 1), added_by="1")
    Dropoff.objects.create(customer=customer, quantity=5, date=date(2024, 1, 2), added_by="1")
    Customer.objects.filter(pk=customer.pk).update(total_dropoffs=12)
    customer.refresh_from_db()
    return customer
