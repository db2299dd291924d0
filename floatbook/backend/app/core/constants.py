# backend/app/core/constants.py
from enum import Enum
from typing import Dict


class SystemRole(str, Enum):
    USER = "user"
    SUPERADMIN = "superadmin"


class CompanyRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class SessionRoute(str, Enum):
    """Where a resolved session should land"""
    LOGIN = "login"
    ADMIN = "admin"
    TENANT = "tenant"
    COMPANY_SETUP = "company_setup"


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class BookingType(str, Enum):
    INDIVIDUAL = "individual"
    GROUP = "group"
    CORPORATE = "corporate"


class PaymentStatusFilter(str, Enum):
    ALL = "all"
    PAID = "paid"
    UNPAID = "unpaid"


class DiscountStatusFilter(str, Enum):
    ALL = "all"
    DISCOUNTED = "discounted"
    NOT_DISCOUNTED = "not_discounted"


class DatePreset(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"


class PaymentIntentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Plan limit value meaning "no limit"
UNLIMITED = -1

MEAL_OPTIONS = [
    "None",
    "Full board",
    "Half board",
    "Breakfast only",
    "Lunch only",
    "Dinner only",
]

SUPPORTED_CURRENCIES = ["USD", "EUR", "GBP", "BDT", "INR", "AUD", "CAD", "SGD", "AED", "JPY"]

# Default catalogue created by the seed script
DEFAULT_PLANS: Dict[str, Dict[str, object]] = {
    "Free": {
        "price": 0.0,
        "room_limit": 5,
        "booking_limit": 50,
        "user_limit": 1,
    },
    "Basic": {
        "price": 19.0,
        "room_limit": 20,
        "booking_limit": 500,
        "user_limit": 5,
    },
    "Pro": {
        "price": 49.0,
        "room_limit": UNLIMITED,
        "booking_limit": UNLIMITED,
        "user_limit": UNLIMITED,
    },
}
