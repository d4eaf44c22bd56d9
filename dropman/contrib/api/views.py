"""
Rewards API endpoints.

Thin JSON layer over RewardsService:
    1. Parses the JSON body / query string
    2. Calls RewardsService
    3. Maps DropmanError subclasses to their HTTP status

Error body: {"error": message, "code": code, "data": {...}}
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from dropman.exceptions import DropmanError, ValidationError
from dropman.protocols.rewards import CustomerRecord
from dropman.service import RewardsService

logger = logging.getLogger("dropman.api")


def customer_json(customer: CustomerRecord) -> dict:
    data = asdict(customer)
    data["name"] = customer.name
    data["eligible_rewards"] = RewardsService.eligible_rewards(customer)
    return data


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """Base view: JSON parsing and error mapping."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except DropmanError as exc:
            if exc.http_status >= 500:
                logger.error("API %s %s failed: %s", request.method, request.path, exc.message)
            return JsonResponse(
                {"error": exc.message, "code": exc.code, "data": exc.data},
                status=exc.http_status,
            )
        except Exception:
            logger.exception("API %s %s: unexpected error", request.method, request.path)
            return JsonResponse({"error": "Internal error", "code": "INTERNAL_ERROR"}, status=500)

    def json_body(self, request) -> dict:
        if not request.body:
            return {}
        try:
            data = json.loads(request.body)
        except (json.JSONDecodeError, ValueError):
            raise ValidationError(message="Invalid JSON")
        if not isinstance(data, dict):
            raise ValidationError(message="JSON body must be an object")
        return data


class RegisterView(ApiView):
    """POST {firstName, lastName, email, phone, referredBy?}"""

    def post(self, request):
        data = self.json_body(request)
        customer, is_new = RewardsService.register(
            data.get("firstName"),
            data.get("lastName"),
            data.get("email"),
            data.get("phone"),
            data.get("referredBy"),
        )
        return JsonResponse(
            {
                "success": True,
                "message": "Registration successful!" if is_new else "Welcome back!",
                "isNew": is_new,
                "customer": customer_json(customer),
            }
        )


class CustomerListView(ApiView):
    """GET ?orderBy=name|createdAt"""

    def get(self, request):
        order_by = request.GET.get("orderBy", "name")
        customers = RewardsService.list_customers(order_by)
        return JsonResponse({"customers": [customer_json(c) for c in customers]})


class CustomerSearchView(ApiView):
    """GET ?query=..."""

    def get(self, request):
        customers = RewardsService.search(request.GET.get("query", ""))
        return JsonResponse({"customers": [customer_json(c) for c in customers]})


class CustomerPhoneLookupView(ApiView):
    def get(self, request, phone):
        customer = RewardsService.find_by_phone(phone)
        return JsonResponse({"customer": customer_json(customer)})


class CustomerDetailView(ApiView):
    """GET customer with drop-off history; DELETE customer (cascades)."""

    def get(self, request, customer_id):
        history = RewardsService.get_with_history(customer_id)
        return JsonResponse(
            {
                "customer": customer_json(history.customer),
                "dropoffs": [asdict(d) for d in history.dropoffs],
                "eligibleRewards": history.eligible_rewards,
            }
        )

    def delete(self, request, customer_id):
        snapshot = RewardsService.delete_customer(customer_id)
        return JsonResponse(
            {
                "success": True,
                "message": "Customer deleted",
                "customer": asdict(snapshot),
            }
        )


class CustomerPhoneView(ApiView):
    """PATCH {phone}"""

    def patch(self, request, customer_id):
        data = self.json_body(request)
        customer = RewardsService.update_phone(customer_id, data.get("phone"))
        return JsonResponse({"success": True, "customer": customer_json(customer)})


class CustomerTierView(ApiView):
    """PATCH {claimed: bool}"""

    def patch(self, request, customer_id, tier):
        data = self.json_body(request)
        customer = RewardsService.set_tier_claimed(customer_id, tier, data.get("claimed"))
        return JsonResponse({"success": True, "customer": customer_json(customer)})


class DropoffView(ApiView):
    """POST {customerId, quantity, date, staffId?}"""

    def post(self, request):
        data = self.json_body(request)
        customer, eligible = RewardsService.record_dropoff(
            data.get("customerId"),
            data.get("quantity"),
            data.get("date"),
            data.get("staffId"),
        )
        return JsonResponse(
            {
                "success": True,
                "message": "Drop-off recorded successfully",
                "customer": customer_json(customer),
                "eligibleRewards": eligible,
            }
        )


class RedeemRewardView(ApiView):
    """POST {customerId}"""

    def post(self, request):
        data = self.json_body(request)
        customer = RewardsService.redeem_reward(data.get("customerId"))
        return JsonResponse(
            {
                "success": True,
                "message": "Reward redeemed!",
                "customer": customer_json(customer),
            }
        )


class StaffLoginView(ApiView):
    """POST {pin}"""

    def post(self, request):
        data = self.json_body(request)
        staff = RewardsService.staff_login(data.get("pin"))
        return JsonResponse({"success": True, "staff": asdict(staff)})


class StatsView(ApiView):
    """GET ?month=YYYY-MM"""

    def get(self, request):
        summary = RewardsService.compute_stats(request.GET.get("month"))
        return JsonResponse(
            {
                "month": summary.month.strftime("%Y-%m"),
                "totalCustomers": summary.total_customers,
                "newCustomersThisMonth": summary.new_customers_this_month,
                "dropoffsThisMonth": summary.dropoffs_this_month,
                "totalDropoffsAllTime": summary.total_dropoffs_all_time,
                "totalRewardsRedeemedAllTime": summary.total_rewards_redeemed_all_time,
            }
        )
