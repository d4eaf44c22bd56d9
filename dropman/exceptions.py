"""Dropman exceptions."""


class DropmanError(Exception):
    """
    Structured exception for rewards operations.

    Every error carries a stable ``code``, a human message and free-form
    ``data``. Subclasses fix the default code and the HTTP status the API
    layer answers with.

    Usage:
        try:
            RewardsService.redeem_reward(customer_id)
        except DropmanError as e:
            if e.code == "NO_REWARD_AVAILABLE":
                handle_nothing_to_redeem()
    """

    default_code = "DROPMAN_ERROR"
    http_status = 500

    _default_messages = {
        "DROPMAN_ERROR": "Rewards operation failed",
        "VALIDATION_ERROR": "Invalid input",
        "MISSING_FIELDS": "All fields are required",
        "INVALID_PHONE": "Phone number must have exactly 10 digits",
        "INVALID_QUANTITY": "Quantity must be a positive integer",
        "INVALID_DATE": "Date is required (YYYY-MM-DD)",
        "INVALID_TIER": "Tier must be one of bronze, silver, gold",
        "INVALID_ORDERING": "Unknown ordering",
        "INVALID_MONTH": "Month must be YYYY-MM",
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "INVALID_PIN": "Invalid PIN",
        "PHONE_CONFLICT": "Phone number already belongs to another customer",
        "NO_REWARD_AVAILABLE": "No rewards available to redeem",
        "STORE_ERROR": "Persistence failure",
    }

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class ValidationError(DropmanError):
    """Missing or malformed input."""

    default_code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(DropmanError):
    """Referenced customer is absent."""

    default_code = "CUSTOMER_NOT_FOUND"
    http_status = 404


class Unauthorized(DropmanError):
    """PIN not recognized."""

    default_code = "INVALID_PIN"
    http_status = 401


class ConflictError(DropmanError):
    """Phone number already owned by a different customer."""

    default_code = "PHONE_CONFLICT"
    http_status = 409


class NoRewardAvailableError(DropmanError):
    """Redemption attempted with zero eligible rewards."""

    default_code = "NO_REWARD_AVAILABLE"
    http_status = 400


class StoreError(DropmanError):
    """Underlying persistence failure. The original error is chained as __cause__."""

    default_code = "STORE_ERROR"
    http_status = 500
