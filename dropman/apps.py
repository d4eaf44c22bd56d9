from django.apps import AppConfig


class DropmanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dropman"
    verbose_name = "Dropman - Recycling Rewards"
