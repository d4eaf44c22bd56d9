"""Staff model - static reference data seeded by migration."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Staff(models.Model):
    """
    Staff member identified by a short numeric PIN.

    The PIN is a shared secret compared as a plain string. It only stamps
    drop-offs and gates staff screens; it is not a security boundary.
    """

    pin = models.CharField(_("PIN"), max_length=10, unique=True)
    name = models.CharField(_("name"), max_length=100)
    is_active = models.BooleanField(_("active"), default=True)

    class Meta:
        db_table = "dropman_staff"
        verbose_name = _("staff member")
        verbose_name_plural = _("staff")
        ordering = ["id"]

    def __str__(self):
        return self.name
