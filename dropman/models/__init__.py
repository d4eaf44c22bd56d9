"""Dropman models."""

from dropman.models.customer import Customer
from dropman.models.dropoff import Dropoff
from dropman.models.staff import Staff

__all__ = [
    "Customer",
    "Dropoff",
    "Staff",
]
