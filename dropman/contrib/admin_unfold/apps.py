from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DropmanAdminUnfoldConfig(AppConfig):
    name = "dropman.contrib.admin_unfold"
    label = "dropman_admin_unfold"
    verbose_name = _("Admin (Unfold)")
