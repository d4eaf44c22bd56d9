"""API app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ApiConfig(AppConfig):
    name = "dropman.contrib.api"
    label = "dropman_api"
    verbose_name = _("Rewards API")
