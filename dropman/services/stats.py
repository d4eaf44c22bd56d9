"""Stats service - dashboard counters."""

from datetime import date, datetime

from django.utils import timezone

from dropman.exceptions import ValidationError
from dropman.protocols.rewards import RewardsStore, StatsSummary
from dropman.utils import coerce_date, month_bounds


def _resolve_month(as_of_month) -> date:
    if as_of_month is None or as_of_month == "":
        return timezone.localdate().replace(day=1)
    if isinstance(as_of_month, datetime):
        return as_of_month.date().replace(day=1)
    if isinstance(as_of_month, date):
        return as_of_month.replace(day=1)
    if isinstance(as_of_month, str):
        value = as_of_month.strip()
        try:
            return datetime.strptime(value, "%Y-%m").date()
        except ValueError:
            pass
        day = coerce_date(value)
        if day is not None:
            return day.replace(day=1)
    raise ValidationError("INVALID_MONTH", month=as_of_month)


def compute_stats(store: RewardsStore, as_of_month=None) -> StatsSummary:
    """
    Counters for the staff dashboard.

    Args:
        store: Rewards store
        as_of_month: date, datetime, "YYYY-MM", "YYYY-MM-DD" or None for the
            current month

    Returns:
        StatsSummary. "This month" drop-offs sum the quantity of drop-offs
        dated in the month; new customers are counted by registration date.
    """
    start, end = month_bounds(_resolve_month(as_of_month))
    total_dropoffs, total_redeemed = store.sum_customer_counters()
    return StatsSummary(
        month=start,
        total_customers=store.count_customers(),
        new_customers_this_month=store.count_customers(created_from=start, created_before=end),
        dropoffs_this_month=store.sum_dropoff_quantity(start, end),
        total_dropoffs_all_time=total_dropoffs,
        total_rewards_redeemed_all_time=total_redeemed,
    )
