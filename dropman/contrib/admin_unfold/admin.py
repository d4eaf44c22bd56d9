"""
Dropman Admin with Unfold theme.

This module provides Unfold-styled admin classes for Dropman models.
To use, add 'dropman.contrib.admin_unfold' to INSTALLED_APPS after 'dropman'.

The admins will automatically unregister the basic admins and register
the Unfold versions.
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from unfold.decorators import display

from dropman.admin import CustomerAdminForm
from dropman.contrib.admin_unfold.base import BaseModelAdmin, BaseTabularInline
from dropman.models import Customer, Dropoff, Staff


def _unfold_badge(text, color="base"):
    """Create Unfold badge with colored background."""
    base_classes = (
        "inline-block font-semibold h-6 leading-6 px-2 "
        "rounded-default whitespace-nowrap text-xs uppercase"
    )

    color_classes = {
        "base": "bg-base-100 text-base-700 dark:bg-base-500/20 dark:text-base-200",
        "orange": "bg-orange-100 text-orange-700 dark:bg-orange-500/20 dark:text-orange-400",
        "green": "bg-green-100 text-green-700 dark:bg-green-500/20 dark:text-green-400",
        "yellow": "bg-yellow-100 text-yellow-700 dark:bg-yellow-500/20 dark:text-yellow-400",
        "blue": "bg-blue-100 text-blue-700 dark:bg-blue-500/20 dark:text-blue-400",
    }

    classes = f"{base_classes} {color_classes.get(color, color_classes['base'])}"
    return format_html('<span class="{}">{}</span>', classes, text)


# Unregister basic admins
for model in [Customer, Dropoff, Staff]:
    try:
        admin.site.unregister(model)
    except admin.sites.NotRegistered:
        pass


# =============================================================================
# CUSTOMER ADMIN
# =============================================================================


class DropoffInline(BaseTabularInline):
    model = Dropoff
    fields = ["date", "quantity", "added_by", "created_at"]
    readonly_fields = ["date", "quantity", "added_by", "created_at"]
    ordering = ["-date", "-created_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(BaseModelAdmin):
    form = CustomerAdminForm
    list_display = [
        "name",
        "email",
        "phone",
        "total_dropoffs",
        "eligible_badge",
        "bronze_badge",
        "silver_badge",
        "gold_badge",
    ]
    list_filter = ["bronze_claimed", "silver_claimed", "gold_claimed"]
    search_fields = ["first_name", "last_name", "email", "phone"]
    readonly_fields = ["total_dropoffs", "rewards_redeemed", "created_at", "updated_at"]
    inlines = [DropoffInline]

    fieldsets = [
        ("Identification", {"fields": ["first_name", "last_name", "referred_by"]}),
        ("Contact", {"fields": ["email", "phone"]}),
        (
            "Rewards",
            {
                "fields": [
                    "total_dropoffs",
                    "rewards_redeemed",
                    "bronze_claimed",
                    "silver_claimed",
                    "gold_claimed",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"], "classes": ["collapse"]}),
    ]

    @display(description="Eligible")
    def eligible_badge(self, obj):
        eligible = obj.eligible_rewards
        return _unfold_badge(str(eligible), "green" if eligible > 0 else "base")

    @display(description="Bronze", boolean=True)
    def bronze_badge(self, obj):
        return obj.bronze_claimed

    @display(description="Silver", boolean=True)
    def silver_badge(self, obj):
        return obj.silver_claimed

    @display(description="Gold", boolean=True)
    def gold_badge(self, obj):
        return obj.gold_claimed


# =============================================================================
# DROPOFF ADMIN
# =============================================================================


@admin.register(Dropoff)
class DropoffAdmin(BaseModelAdmin):
    list_display = ["date", "customer_link", "quantity_badge", "added_by", "created_at"]
    list_filter = ["date", "added_by"]
    search_fields = ["customer__first_name", "customer__last_name", "customer__email"]
    date_hierarchy = "date"
    readonly_fields = ["customer", "quantity", "date", "added_by", "created_at"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    @display(description="Customer")
    def customer_link(self, obj):
        url = reverse("admin:dropman_customer_change", args=[obj.customer.pk])
        return format_html(
            '<a href="{}" class="text-primary-600 hover:text-primary-700">{}</a>',
            url,
            obj.customer.name,
        )

    @display(description="Quantity")
    def quantity_badge(self, obj):
        return _unfold_badge(f"+{obj.quantity}", "blue")


# =============================================================================
# STAFF ADMIN
# =============================================================================


@admin.register(Staff)
class StaffAdmin(BaseModelAdmin):
    list_display = ["name", "is_active_badge"]
    list_filter = ["is_active"]
    search_fields = ["name"]

    @display(description="Active", boolean=True)
    def is_active_badge(self, obj):
        return obj.is_active
