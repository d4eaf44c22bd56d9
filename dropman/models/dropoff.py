"""Dropoff model - immutable recycling contribution."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Dropoff(models.Model):
    """
    A single recorded drop-off.

    Append-only: created together with the customer's counter increment,
    removed only by cascade when the customer is deleted.
    """

    customer = models.ForeignKey(
        "dropman.Customer",
        on_delete=models.CASCADE,
        related_name="dropoffs",
        verbose_name=_("customer"),
    )
    quantity = models.PositiveIntegerField(_("quantity"))
    date = models.DateField(_("date"))
    added_by = models.CharField(
        _("added by"),
        max_length=100,
        help_text=_("Staff identifier that recorded the drop-off"),
    )
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)

    class Meta:
        db_table = "dropman_dropoff"
        verbose_name = _("drop-off")
        verbose_name_plural = _("drop-offs")
        ordering = ["-date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="dropman_dropoff_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["customer", "-date"], name="dropman_drop_cust_date_idx"),
            models.Index(fields=["date"], name="dropman_drop_date_idx"),
        ]

    def __str__(self):
        return f"{self.customer_id}: +{self.quantity} on {self.date}"
