from django.urls import path

from .views import (
    CustomerDetailView,
    CustomerListView,
    CustomerPhoneLookupView,
    CustomerPhoneView,
    CustomerSearchView,
    CustomerTierView,
    DropoffView,
    RedeemRewardView,
    RegisterView,
    StaffLoginView,
    StatsView,
)

app_name = "dropman_api"

urlpatterns = [
    path("customers/register", RegisterView.as_view(), name="register"),
    path("customers/search", CustomerSearchView.as_view(), name="customer-search"),
    path("customers/phone/<str:phone>", CustomerPhoneLookupView.as_view(), name="customer-by-phone"),
    path("customers/<int:customer_id>", CustomerDetailView.as_view(), name="customer-detail"),
    path("customers/<int:customer_id>/phone", CustomerPhoneView.as_view(), name="customer-phone"),
    path("customers/<int:customer_id>/tiers/<str:tier>", CustomerTierView.as_view(), name="customer-tier"),
    path("customers", CustomerListView.as_view(), name="customer-list"),
    path("dropoffs", DropoffView.as_view(), name="dropoffs"),
    path("rewards/redeem", RedeemRewardView.as_view(), name="redeem"),
    path("staff/login", StaffLoginView.as_view(), name="staff-login"),
    path("stats", StatsView.as_view(), name="stats"),
]
