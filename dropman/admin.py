"""Dropman admin.

Unfold-styled versions live in dropman.contrib.admin_unfold.
"""

from django import forms
from django.contrib import admin
from django.utils.html import format_html

from dropman.adapters.django_store import DjangoRewardsStore
from dropman.exceptions import DropmanError
from dropman.gates import Gates
from dropman.models import Customer, Dropoff, Staff
from dropman.utils import normalize_phone


class CustomerAdminForm(forms.ModelForm):
    """Phone edits go through the same gates as the API (G1, G2)."""

    class Meta:
        model = Customer
        fields = "__all__"

    def clean_phone(self):
        phone = normalize_phone(self.cleaned_data.get("phone"))
        if not phone:
            return ""
        try:
            Gates.phone_format(phone)
            Gates.phone_uniqueness(
                DjangoRewardsStore(), phone, exclude_customer_id=self.instance.pk
            )
        except DropmanError as exc:
            raise forms.ValidationError(exc.message, code=exc.code.lower()) from exc
        return phone


# ===========================================
# Inline Classes (must be defined before CustomerAdmin)
# ===========================================


class DropoffInline(admin.TabularInline):
    model = Dropoff
    extra = 0
    fields = ["date", "quantity", "added_by", "created_at"]
    readonly_fields = ["date", "quantity", "added_by", "created_at"]
    ordering = ["-date", "-created_at"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


# ===========================================
# Customer Admin
# ===========================================


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    form = CustomerAdminForm
    list_display = [
        "name",
        "email",
        "phone",
        "total_dropoffs",
        "rewards_redeemed",
        "eligible_rewards_display",
        "tiers_display",
        "created_at",
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

    def eligible_rewards_display(self, obj):
        return obj.eligible_rewards

    eligible_rewards_display.short_description = "Eligible"

    def tiers_display(self, obj):
        claimed = [
            tier
            for tier, flag in (
                ("B", obj.bronze_claimed),
                ("S", obj.silver_claimed),
                ("G", obj.gold_claimed),
            )
            if flag
        ]
        return " ".join(claimed) or "-"

    tiers_display.short_description = "Tiers claimed"


# ===========================================
# Dropoff Admin
# ===========================================


@admin.register(Dropoff)
class DropoffAdmin(admin.ModelAdmin):
    list_display = ["date", "customer_link", "quantity", "added_by", "created_at"]
    list_filter = ["date", "added_by"]
    search_fields = ["customer__first_name", "customer__last_name", "customer__email"]
    date_hierarchy = "date"
    readonly_fields = ["customer", "quantity", "date", "added_by", "created_at"]

    def has_add_permission(self, request):
        # Totals are only kept in sync by RewardsService.record_dropoff
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def customer_link(self, obj):
        from django.urls import reverse

        url = reverse("admin:dropman_customer_change", args=[obj.customer.pk])
        return format_html('<a href="{}">{}</a>', url, obj.customer.name)

    customer_link.short_description = "Customer"


# ===========================================
# Staff Admin
# ===========================================


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ["name", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name"]
