"""Unfold base classes shared by the Dropman admins."""

from unfold.admin import ModelAdmin, TabularInline


class BaseModelAdmin(ModelAdmin):
    list_per_page = 50
    warn_unsaved_form = True


class BaseTabularInline(TabularInline):
    extra = 0
