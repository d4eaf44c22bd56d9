"""Customer model.

Data architecture:
    Customer.phone
        Normalized 10-digit phone, the primary dedup key at registration.
        Unique when non-blank (partial constraint). Customers registered
        before phone collection was mandatory have it blank and get it
        backfilled later. Gates.phone_uniqueness() reports conflicts early;
        the constraint settles concurrent registrations.

    Customer.email
        Deliberately NOT unique. The same address may belong to several
        customers under different names.

    Customer.total_dropoffs / rewards_redeemed
        Running counters. Only ever incremented with F() expressions
        (see adapters/django_store.py), never assigned from memory.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Customer(models.Model):
    """Registered recycling customer."""

    # Identity
    first_name = models.CharField(_("first name"), max_length=100)
    last_name = models.CharField(_("last name"), max_length=100)
    email = models.EmailField(_("email"), db_index=True)
    phone = models.CharField(_("phone"), max_length=20, blank=True, db_index=True)
    referred_by = models.CharField(_("referred by"), max_length=200, blank=True)

    # Counters
    total_dropoffs = models.PositiveIntegerField(
        _("total drop-offs"),
        default=0,
        help_text=_("Cumulative quantity dropped off (never decreases)"),
    )
    rewards_redeemed = models.PositiveIntegerField(
        _("rewards redeemed"),
        default=0,
        help_text=_("Flat rewards already redeemed (one per 10 units)"),
    )

    # Tier claims (independent, toggled by staff)
    bronze_claimed = models.BooleanField(_("bronze claimed"), default=False)
    silver_claimed = models.BooleanField(_("silver claimed"), default=False)
    gold_claimed = models.BooleanField(_("gold claimed"), default=False)

    # Audit
    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "dropman_customer"
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="dropman_cust_name_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["phone"],
                condition=~models.Q(phone=""),
                name="dropman_customer_phone_unique",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.email})"

    @property
    def name(self) -> str:
        """Full name (first + last)."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def eligible_rewards(self) -> int:
        """Unredeemed flat rewards."""
        from dropman.conf import dropman_settings

        return self.total_dropoffs // dropman_settings.REWARD_EVERY - self.rewards_redeemed
